# xistream:header:start
#
#   project      : XIStream
#   file         : events.py
#   file_relpath : src/xistream/stax/events.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Event model for pull-based XML reading.

Events are small immutable value objects. Each concrete event class carries a
class-level `EventType`; the numeric values follow the StAX event type
constants so machine output stays comparable with other pull parsers.

Qualified names are represented by `QName`. Its string form is Clark notation
(``{namespace}local``), which is also how expat reports names when it runs in
namespace mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

# Whitespace as defined by the XML 1.0 ``S`` production.
XML_WHITESPACE: str = " \t\r\n"


class EventType(IntEnum):
    """Kinds of XML events (StAX numbering)."""

    START_ELEMENT = 1
    END_ELEMENT = 2
    PROCESSING_INSTRUCTION = 3
    CHARACTERS = 4
    COMMENT = 5
    START_DOCUMENT = 7
    END_DOCUMENT = 8
    DTD = 11


@dataclass(frozen=True, slots=True)
class QName:
    """Namespace-qualified XML name.

    Equality and hashing ignore the prefix, matching XML namespace semantics:
    ``xi:include`` and ``x:include`` are the same name when both prefixes are
    bound to the same namespace URI.
    """

    namespace_uri: str
    local_part: str
    prefix: str = field(default="", compare=False)

    @classmethod
    def from_expat(cls, raw: str) -> QName:
        """Parse a name reported by expat with ``namespace_separator=" "``.

        Expat reports ``"uri local prefix"`` (with ``namespace_prefixes``),
        ``"uri local"`` for the default namespace, and ``"local"`` for names in
        no namespace.

        Args:
            raw (str): The raw name as reported by expat.

        Returns:
            QName: The parsed name.
        """
        parts: list[str] = raw.split(" ")
        if len(parts) == 3:
            return cls(namespace_uri=parts[0], local_part=parts[1], prefix=parts[2])
        if len(parts) == 2:
            return cls(namespace_uri=parts[0], local_part=parts[1])
        return cls(namespace_uri="", local_part=raw)

    @property
    def qualified_name(self) -> str:
        """Return the name as written in the source (``prefix:local`` or ``local``)."""
        return f"{self.prefix}:{self.local_part}" if self.prefix else self.local_part

    def __str__(self) -> str:
        return f"{{{self.namespace_uri}}}{self.local_part}" if self.namespace_uri else self.local_part


@dataclass(frozen=True, slots=True)
class Attribute:
    """An attribute of a start element."""

    name: QName
    value: str


@dataclass(frozen=True, slots=True)
class Location:
    """Position of an event in its source document."""

    line: int
    column: int
    system_id: str | None = None

    def __str__(self) -> str:
        where: str = f"line {self.line}, column {self.column}"
        return f"{self.system_id}: {where}" if self.system_id else where


@dataclass(frozen=True, slots=True, kw_only=True)
class XMLEvent:
    """Base class for all events."""

    event_type: ClassVar[EventType]

    location: Location | None = None

    @property
    def is_start_document(self) -> bool:
        """Return True for a start-of-document marker."""
        return self.event_type == EventType.START_DOCUMENT

    @property
    def is_end_document(self) -> bool:
        """Return True for an end-of-document marker."""
        return self.event_type == EventType.END_DOCUMENT

    @property
    def is_start_element(self) -> bool:
        """Return True for a start tag."""
        return self.event_type == EventType.START_ELEMENT

    @property
    def is_end_element(self) -> bool:
        """Return True for an end tag."""
        return self.event_type == EventType.END_ELEMENT

    @property
    def is_characters(self) -> bool:
        """Return True for character data (including CDATA sections)."""
        return self.event_type == EventType.CHARACTERS

    @property
    def is_processing_instruction(self) -> bool:
        """Return True for a processing instruction."""
        return self.event_type == EventType.PROCESSING_INSTRUCTION

    @property
    def is_comment(self) -> bool:
        """Return True for a comment."""
        return self.event_type == EventType.COMMENT


@dataclass(frozen=True, slots=True, kw_only=True)
class StartDocument(XMLEvent):
    """Start of a document, carrying the XML declaration (if any)."""

    event_type: ClassVar[EventType] = EventType.START_DOCUMENT

    version: str | None = None
    encoding: str | None = None
    standalone: bool | None = None
    system_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EndDocument(XMLEvent):
    """End of a document."""

    event_type: ClassVar[EventType] = EventType.END_DOCUMENT


@dataclass(frozen=True, slots=True, kw_only=True)
class StartElement(XMLEvent):
    """A start tag (also reported for empty-element tags)."""

    event_type: ClassVar[EventType] = EventType.START_ELEMENT

    name: QName
    attributes: tuple[Attribute, ...] = ()
    # (prefix, uri) pairs declared on this element; prefix "" is the default namespace.
    namespaces: tuple[tuple[str, str], ...] = ()

    def get_attribute_by_name(self, name: QName | str) -> Attribute | None:
        """Return the attribute with the given name, or None.

        Args:
            name (QName | str): A qualified name, or a plain local name for an
                attribute in no namespace.

        Returns:
            Attribute | None: The matching attribute, or None if absent.
        """
        wanted: QName = name if isinstance(name, QName) else QName("", name)
        for attr in self.attributes:
            if attr.name == wanted:
                return attr
        return None

    def __str__(self) -> str:
        attrs: str = "".join(f' {a.name.qualified_name}="{a.value}"' for a in self.attributes)
        return f"<{self.name.qualified_name}{attrs}>"


@dataclass(frozen=True, slots=True, kw_only=True)
class EndElement(XMLEvent):
    """An end tag."""

    event_type: ClassVar[EventType] = EventType.END_ELEMENT

    name: QName


@dataclass(frozen=True, slots=True, kw_only=True)
class Characters(XMLEvent):
    """Character data. Adjacent text is coalesced into a single event."""

    event_type: ClassVar[EventType] = EventType.CHARACTERS

    data: str
    is_cdata: bool = False

    @property
    def is_whitespace(self) -> bool:
        """Return True if the data consists only of XML whitespace."""
        return self.data.strip(XML_WHITESPACE) == ""


@dataclass(frozen=True, slots=True, kw_only=True)
class Comment(XMLEvent):
    """A comment."""

    event_type: ClassVar[EventType] = EventType.COMMENT

    text: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProcessingInstruction(XMLEvent):
    """A processing instruction."""

    event_type: ClassVar[EventType] = EventType.PROCESSING_INSTRUCTION

    target: str
    data: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class DTD(XMLEvent):
    """A document type declaration."""

    event_type: ClassVar[EventType] = EventType.DTD

    name: str
    system_id: str | None = None
    public_id: str | None = None


def is_ignorable_before_tag(event: XMLEvent) -> bool:
    """Return True if ``next_tag()`` may skip ``event`` on its way to a tag.

    Whitespace-only text, comments, processing instructions, the DTD and the
    start-of-document marker are skipped. Anything else either is a tag (or the
    end of the document) or is content that makes ``next_tag()`` fail.

    Args:
        event (XMLEvent): The candidate event.

    Returns:
        bool: True if the event can be skipped.
    """
    if isinstance(event, Characters):
        return event.is_whitespace
    return event.event_type in (
        EventType.COMMENT,
        EventType.PROCESSING_INSTRUCTION,
        EventType.DTD,
        EventType.START_DOCUMENT,
    )
