# xistream:header:start
#
#   project      : XIStream
#   file         : parser.py
#   file_relpath : src/xistream/stax/parser.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Single-document pull reader built on ``xml.parsers.expat``.

Expat is a push parser: it calls handlers while it is fed bytes. The reader
turns it into a pull parser by feeding one chunk at a time and buffering the
events produced by the handlers until the consumer asks for them.

Implementation details:
  * Namespace processing is always on (``namespace_separator=" "``), and expat
    also reports prefixes, so names map losslessly onto `QName`.
  * Character data is coalesced: text split across expat callbacks or across
    chunk boundaries is reported as a single `Characters` event. CDATA sections
    are reported as their own `Characters` event with ``is_cdata=True``.
  * A `StartDocument` event carrying the XML declaration is synthesized before
    the first parsed event, and an `EndDocument` event after the last one.
  * `open_event_reader` primes the reader, so a source that is unreadable or
    malformed right at its start fails at open time rather than on first read.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, BinaryIO, Final
from xml.parsers import expat

from xistream.config.logging import get_logger
from xistream.config.model import default_config
from xistream.errors import (
    EventStreamExhaustedError,
    UnsupportedPropertyError,
    XMLStreamError,
)
from xistream.stax.base import EventReaderBase
from xistream.stax.events import (
    DTD,
    Attribute,
    Characters,
    Comment,
    EndDocument,
    EndElement,
    Location,
    ProcessingInstruction,
    QName,
    StartDocument,
    StartElement,
    XMLEvent,
)

if TYPE_CHECKING:
    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig

logger: XIStreamLogger = get_logger(__name__)

# Reader property names accepted by `ExpatEventReader.get_property`.
PROPERTY_VERSION: Final[str] = "version"
PROPERTY_ENCODING: Final[str] = "encoding"
PROPERTY_STANDALONE: Final[str] = "standalone"
PROPERTY_SYSTEM_ID: Final[str] = "system_id"
PROPERTY_CHUNK_SIZE: Final[str] = "chunk_size"
PROPERTY_NAMESPACE_AWARE: Final[str] = "namespace_aware"

SUPPORTED_PROPERTIES: Final[frozenset[str]] = frozenset(
    {
        PROPERTY_VERSION,
        PROPERTY_ENCODING,
        PROPERTY_STANDALONE,
        PROPERTY_SYSTEM_ID,
        PROPERTY_CHUNK_SIZE,
        PROPERTY_NAMESPACE_AWARE,
    }
)


class ExpatEventReader(EventReaderBase):
    """Pull reader over one XML document read from a binary stream.

    The reader owns ``stream`` and closes it in `close`.

    Args:
        stream (BinaryIO): The byte stream to parse.
        config (ReaderConfig | None): Reader settings (built-in defaults if None).
        system_id (str | None): Location of the document, used for relative
            references in the DTD and reported in event locations.
    """

    def __init__(
        self,
        stream: BinaryIO,
        config: ReaderConfig | None = None,
        *,
        system_id: str | None = None,
    ) -> None:
        self._stream: BinaryIO = stream
        self._config: ReaderConfig = config or default_config()
        self._system_id: str | None = system_id

        self._queue: deque[XMLEvent] = deque()
        self._last_event = None

        # Pending character data (flushed as one event before any other event).
        self._text: list[str] = []
        self._text_location: Location | None = None
        self._in_cdata: bool = False
        self._pending_namespaces: list[tuple[str, str]] = []

        # XML declaration, filled in by expat before any other event.
        self._version: str | None = None
        self._encoding: str | None = None
        self._standalone: bool | None = None

        self._started: bool = False
        self._finished: bool = False
        self._closed: bool = False

        self._parser = self._create_parser()

    def _create_parser(self) -> expat.XMLParserType:
        parser = expat.ParserCreate(namespace_separator=" ")
        parser.namespace_prefixes = True
        parser.buffer_text = True
        parser.ordered_attributes = True
        if self._system_id is not None:
            parser.SetBase(self._system_id)

        parser.XmlDeclHandler = self._on_xml_decl
        parser.StartDoctypeDeclHandler = self._on_start_doctype
        parser.StartNamespaceDeclHandler = self._on_start_namespace
        parser.StartElementHandler = self._on_start_element
        parser.EndElementHandler = self._on_end_element
        parser.CharacterDataHandler = self._on_characters
        parser.StartCdataSectionHandler = self._on_start_cdata
        parser.EndCdataSectionHandler = self._on_end_cdata
        parser.ProcessingInstructionHandler = self._on_processing_instruction
        parser.CommentHandler = self._on_comment
        return parser

    # --- expat handlers ---

    def _location(self) -> Location:
        return Location(
            line=self._parser.CurrentLineNumber,
            column=self._parser.CurrentColumnNumber,
            system_id=self._system_id,
        )

    def _flush_text(self) -> None:
        if self._text:
            self._queue.append(
                Characters(
                    data="".join(self._text),
                    is_cdata=self._in_cdata,
                    location=self._text_location,
                )
            )
            self._text = []
            self._text_location = None

    def _on_xml_decl(self, version: str | None, encoding: str | None, standalone: int) -> None:
        self._version = version
        self._encoding = encoding
        # expat reports -1 when the declaration has no standalone pseudo-attribute
        self._standalone = None if standalone == -1 else bool(standalone)

    def _on_start_doctype(
        self,
        doctype_name: str,
        system_id: str | None,
        public_id: str | None,
        _has_internal_subset: int,
    ) -> None:
        self._flush_text()
        self._queue.append(
            DTD(
                name=doctype_name,
                system_id=system_id,
                public_id=public_id,
                location=self._location(),
            )
        )

    def _on_start_namespace(self, prefix: str | None, uri: str | None) -> None:
        self._pending_namespaces.append((prefix or "", uri or ""))

    def _on_start_element(self, name: str, attributes: list[str]) -> None:
        self._flush_text()
        attrs: tuple[Attribute, ...] = tuple(
            Attribute(name=QName.from_expat(attributes[i]), value=attributes[i + 1])
            for i in range(0, len(attributes), 2)
        )
        self._queue.append(
            StartElement(
                name=QName.from_expat(name),
                attributes=attrs,
                namespaces=tuple(self._pending_namespaces),
                location=self._location(),
            )
        )
        self._pending_namespaces = []

    def _on_end_element(self, name: str) -> None:
        self._flush_text()
        self._queue.append(EndElement(name=QName.from_expat(name), location=self._location()))

    def _on_characters(self, data: str) -> None:
        if not self._text:
            self._text_location = self._location()
        self._text.append(data)

    def _on_start_cdata(self) -> None:
        self._flush_text()
        self._in_cdata = True

    def _on_end_cdata(self) -> None:
        self._flush_text()
        self._in_cdata = False

    def _on_processing_instruction(self, target: str, data: str) -> None:
        self._flush_text()
        self._queue.append(
            ProcessingInstruction(target=target, data=data, location=self._location())
        )

    def _on_comment(self, data: str) -> None:
        self._flush_text()
        self._queue.append(Comment(text=data, location=self._location()))

    # --- feeding ---

    def _read_chunk(self) -> bytes:
        try:
            return self._stream.read(self._config.chunk_size)
        except OSError as exc:
            raise XMLStreamError(f"Error reading XML stream: {exc}") from exc

    def _feed(self, data: bytes, final: bool) -> None:
        try:
            self._parser.Parse(data, final)
        except expat.ExpatError as exc:
            raise XMLStreamError(
                expat.ErrorString(exc.code),
                location=Location(exc.lineno, exc.offset, self._system_id),
            ) from exc

    def _fill(self) -> None:
        """Feed the parser until at least one event is queued or the input is exhausted."""
        while not self._queue and not self._finished:
            chunk: bytes = self._read_chunk()
            final: bool = not chunk
            self._feed(chunk, final)
            if final:
                self._flush_text()
            # The declaration is always reported before any queued event, so
            # the start-of-document marker can be completed at this point.
            if not self._started and (self._queue or final):
                self._started = True
                self._queue.appendleft(
                    StartDocument(
                        version=self._version,
                        encoding=self._encoding,
                        standalone=self._standalone,
                        system_id=self._system_id,
                        location=Location(1, 0, self._system_id),
                    )
                )
            if final:
                self._queue.append(EndDocument(location=self._location()))
                self._finished = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise XMLStreamError("Reader is closed")

    # --- reader contract ---

    def peek(self) -> XMLEvent | None:
        """Return the next event without consuming it, or None at end of stream.

        Raises:
            XMLStreamError: If the input is malformed or cannot be read, or the
                reader is closed.
        """
        self._ensure_open()
        self._fill()
        return self._queue[0] if self._queue else None

    def next_event(self) -> XMLEvent:
        """Consume and return the next event.

        Raises:
            EventStreamExhaustedError: If the end-of-document event was already consumed.
        """
        if self.peek() is None:
            raise EventStreamExhaustedError("No more events in XML stream")
        event: XMLEvent = self._queue.popleft()
        self._last_event = event
        return event

    def get_property(self, name: str) -> object:
        """Return a reader property.

        Supported names are listed in `SUPPORTED_PROPERTIES`. Values taken from
        the XML declaration are None until the declaration was parsed (the reader
        is primed on open, so in practice they are available right away).

        Raises:
            UnsupportedPropertyError: If ``name`` is not a supported property.
        """
        if name not in SUPPORTED_PROPERTIES:
            raise UnsupportedPropertyError(f"Unsupported reader property: {name!r}")
        values: dict[str, object] = {
            PROPERTY_VERSION: self._version,
            PROPERTY_ENCODING: self._encoding,
            PROPERTY_STANDALONE: self._standalone,
            PROPERTY_SYSTEM_ID: self._system_id,
            PROPERTY_CHUNK_SIZE: self._config.chunk_size,
            PROPERTY_NAMESPACE_AWARE: True,
        }
        return values[name]

    @property
    def system_id(self) -> str | None:
        """Location of the document being read, if known."""
        return self._system_id

    @property
    def closed(self) -> bool:
        """True once `close` was called."""
        return self._closed

    def close(self) -> None:
        """Close the reader and its byte stream. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._queue.clear()
        logger.trace("Closing event reader for %s", self._system_id)
        self._stream.close()


def open_event_reader(
    stream: BinaryIO,
    config: ReaderConfig | None = None,
    *,
    system_id: str | None = None,
) -> ExpatEventReader:
    """Create an `ExpatEventReader` over ``stream`` and read up to its first event.

    On failure the stream is closed before the error propagates.

    Args:
        stream (BinaryIO): The byte stream to parse; ownership passes to the reader.
        config (ReaderConfig | None): Reader settings.
        system_id (str | None): Location of the document.

    Returns:
        ExpatEventReader: The primed reader.

    Raises:
        XMLStreamError: If the stream cannot be read or does not start as
            well-formed XML.
    """
    reader = ExpatEventReader(stream, config, system_id=system_id)
    try:
        reader.peek()
    except XMLStreamError:
        reader.close()
        raise
    return reader
