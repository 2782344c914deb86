# xistream:header:start
#
#   project      : XIStream
#   file         : exit_codes.py
#   file_relpath : src/xistream/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Exit codes for the XIStream CLI.

Values follow the BSD `sysexits` convention so that scripts can tell bad input
apart from a missing document.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the XIStream CLI.

    Attributes:
        SUCCESS: Every document was read to the end.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Malformed XML or an invalid ``xi:include`` element (missing
            ``href``, unsupported ``parse`` mode, nesting too deep). Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: The root document or an included document cannot be
            opened. Mirrors BSD ``EX_NOINPUT (66)``.
        INTERNAL_ERROR: Reader consistency failure. Mirrors BSD ``EX_SOFTWARE (70)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    INTERNAL_ERROR = 70  # EX_SOFTWARE

    UNEXPECTED_ERROR = 255
