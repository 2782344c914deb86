# xistream:header:start
#
#   project      : XIStream
#   file         : directive.py
#   file_relpath : src/xistream/core/directive.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Recognition and validation of ``xi:include`` elements.

Only the subset needed for whole-document XML inclusion is supported: the
``href`` attribute is required, ``parse`` must be absent or ``xml``, and the
``fallback`` child (like any other child) is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from xistream.errors import MissingReferenceError, UnsupportedInclusionModeError
from xistream.stax.events import QName, StartElement

if TYPE_CHECKING:
    from xistream.stax.events import Attribute, XMLEvent

XINCLUDE_NAMESPACE: Final[str] = "http://www.w3.org/2001/XInclude"
XINCLUDE_TAG: Final[QName] = QName(XINCLUDE_NAMESPACE, "include")
XINCLUDE_HREF_ATTR: Final[QName] = QName("", "href")
XINCLUDE_PARSE_ATTR: Final[QName] = QName("", "parse")

PARSE_XML: Final[str] = "xml"


def is_include_event(event: XMLEvent | None) -> bool:
    """Return True if ``event`` is the start tag of an ``xi:include`` element."""
    return isinstance(event, StartElement) and event.name == XINCLUDE_TAG


@dataclass(frozen=True, slots=True)
class IncludeDirective:
    """A validated include request.

    Attributes:
        href (str): The reference to resolve, as written.
        parse (str): The inclusion mode (always ``"xml"``).
        element (StartElement): The element the directive was read from.
    """

    href: str
    parse: str
    element: StartElement

    @classmethod
    def from_element(cls, element: StartElement) -> IncludeDirective:
        """Validate an include start tag and extract the directive.

        Args:
            element (StartElement): A start tag for which `is_include_event` holds.

        Returns:
            IncludeDirective: The directive.

        Raises:
            MissingReferenceError: If the element has no ``href`` attribute.
            UnsupportedInclusionModeError: If ``parse`` is present and not ``xml``.
        """
        href_attr: Attribute | None = element.get_attribute_by_name(XINCLUDE_HREF_ATTR)
        if href_attr is None:
            raise MissingReferenceError(
                f"XML include requires an href attribute: {element}", element=element
            )

        parse_attr: Attribute | None = element.get_attribute_by_name(XINCLUDE_PARSE_ATTR)
        if parse_attr is not None and parse_attr.value != PARSE_XML:
            raise UnsupportedInclusionModeError(
                f"Only parse=\"xml\" is supported in included files: {element}", element=element
            )

        return cls(href=href_attr.value, parse=PARSE_XML, element=element)
