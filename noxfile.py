# xistream:header:start
#
#   project      : XIStream
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest (without the slow property tests) and pyright.
  - `lint`: Ruff lint.
  - `format_check`: Verify formatting (ruff).
  - `format`: Apply formatting (ruff).
  - `property_test`: Long-running property tests (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import sys

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

PYTHONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["lint", "qa"]
nox.options.reuse_existing_virtualenvs = True


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff lint checks."""
    session.install("ruff")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting without modifying files."""
    session.install("ruff")
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting."""
    session.install("ruff")
    session.run("ruff", "format", ".")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the long-running property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "-m", "hypothesis_slow", "tests", *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate the metadata."""
    session.install("build", "twine")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
