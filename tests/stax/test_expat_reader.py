# xistream:header:start
#
#   project      : XIStream
#   file         : test_expat_reader.py
#   file_relpath : tests/stax/test_expat_reader.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Tests for the single-document expat-backed event reader."""

from __future__ import annotations

import io

import pytest

from tests.conftest import collect, make_config, parametrize, signature
from xistream.errors import (
    EventStreamExhaustedError,
    UnsupportedPropertyError,
    XMLStreamError,
)
from xistream.stax.events import (
    DTD,
    Characters,
    EventType,
    QName,
    StartDocument,
    StartElement,
)
from xistream.stax.parser import (
    PROPERTY_CHUNK_SIZE,
    PROPERTY_ENCODING,
    PROPERTY_VERSION,
    ExpatEventReader,
    open_event_reader,
)


def _reader(text: str, *, chunk_size: int | None = None) -> ExpatEventReader:
    config = make_config(chunk_size=chunk_size) if chunk_size else None
    return open_event_reader(io.BytesIO(text.encode("utf-8")), config, system_id="mem:doc")


def test_simple_document_event_sequence() -> None:
    """Document markers wrap the element events, in document order."""
    reader = _reader('<?xml version="1.0"?><root a="1"><child>text</child><!--c--><?pi d?></root>')
    assert signature(collect(reader)) == [
        ("START_DOCUMENT", ""),
        ("START_ELEMENT", "root a=1"),
        ("START_ELEMENT", "child"),
        ("CHARACTERS", "text"),
        ("END_ELEMENT", "child"),
        ("COMMENT", "c"),
        ("PROCESSING_INSTRUCTION", "pi d"),
        ("END_ELEMENT", "root"),
        ("END_DOCUMENT", ""),
    ]


def test_start_document_carries_xml_declaration() -> None:
    """The synthesized start-of-document event reports the XML declaration."""
    reader = _reader('<?xml version="1.0" encoding="UTF-8" standalone="yes"?><r/>')
    first = reader.next_event()
    assert isinstance(first, StartDocument)
    assert first.version == "1.0"
    assert first.encoding == "UTF-8"
    assert first.standalone is True
    assert first.system_id == "mem:doc"


def test_start_document_without_declaration() -> None:
    reader = _reader("<r/>")
    first = reader.next_event()
    assert isinstance(first, StartDocument)
    assert first.version is None
    assert first.standalone is None


@parametrize("chunk_size", [1, 2, 7, 65536])
def test_text_is_coalesced_across_chunks(chunk_size: int) -> None:
    """Character data split over several feeds is reported as one event."""
    reader = _reader("<r>hello &amp; goodbye</r>", chunk_size=chunk_size)
    texts = [e for e in collect(reader) if isinstance(e, Characters)]
    assert [t.data for t in texts] == ["hello & goodbye"]


def test_cdata_section_is_reported_separately() -> None:
    reader = _reader("<r>a<![CDATA[<b>]]>c</r>")
    texts = [e for e in collect(reader) if isinstance(e, Characters)]
    assert [(t.data, t.is_cdata) for t in texts] == [("a", False), ("<b>", True), ("c", False)]


def test_namespaced_names_keep_uri_and_prefix() -> None:
    reader = _reader('<p:r xmlns:p="urn:p" xmlns="urn:d"><c p:x="1"/></p:r>')
    starts = [e for e in collect(reader) if isinstance(e, StartElement)]
    root, child = starts
    assert root.name == QName("urn:p", "r")
    assert root.name.prefix == "p"
    assert root.name.qualified_name == "p:r"
    assert dict(root.namespaces) == {"p": "urn:p", "": "urn:d"}
    assert child.name == QName("urn:d", "c")
    attr = child.get_attribute_by_name(QName("urn:p", "x"))
    assert attr is not None
    assert attr.value == "1"


def test_doctype_is_reported() -> None:
    reader = _reader('<!DOCTYPE r SYSTEM "r.dtd"><r/>')
    dtds = [e for e in collect(reader) if isinstance(e, DTD)]
    assert len(dtds) == 1
    assert dtds[0].name == "r"
    assert dtds[0].system_id == "r.dtd"


def test_peek_does_not_consume() -> None:
    reader = _reader("<r/>")
    first = reader.peek()
    assert first is not None
    assert reader.peek() is first
    assert reader.next_event() is first


def test_next_event_past_end_raises() -> None:
    reader = _reader("<r/>")
    events = collect(reader)
    assert events[-1].event_type == EventType.END_DOCUMENT
    assert reader.peek() is None
    assert not reader.has_next()
    with pytest.raises(EventStreamExhaustedError):
        reader.next_event()


def test_properties() -> None:
    reader = _reader('<?xml version="1.0" encoding="utf-8"?><r/>', chunk_size=16)
    assert reader.get_property(PROPERTY_VERSION) == "1.0"
    assert reader.get_property(PROPERTY_ENCODING) == "utf-8"
    assert reader.get_property(PROPERTY_CHUNK_SIZE) == 16
    with pytest.raises(UnsupportedPropertyError):
        reader.get_property("no-such-property")


def test_malformed_document_start_fails_on_open() -> None:
    """A stream that does not start as XML is rejected when opened, and closed."""
    stream = io.BytesIO(b"this is not xml")
    with pytest.raises(XMLStreamError) as excinfo:
        open_event_reader(stream, system_id="mem:bad")
    assert stream.closed
    assert excinfo.value.location is not None
    assert excinfo.value.location.system_id == "mem:bad"


def test_empty_document_fails_on_open() -> None:
    with pytest.raises(XMLStreamError):
        open_event_reader(io.BytesIO(b""))


def test_malformed_content_fails_when_reached() -> None:
    """Errors later in the document surface on the read that reaches them."""
    reader = _reader("<r><a></b></r>", chunk_size=4)
    assert reader.next_event().is_start_document
    with pytest.raises(XMLStreamError):
        collect(reader)


def test_close_is_idempotent_and_closes_stream() -> None:
    stream = io.BytesIO(b"<r/>")
    reader = open_event_reader(stream)
    reader.close()
    reader.close()
    assert stream.closed
    assert reader.closed
    with pytest.raises(XMLStreamError):
        reader.peek()


def test_context_manager_closes() -> None:
    stream = io.BytesIO(b"<r/>")
    with open_event_reader(stream) as reader:
        assert reader.has_next()
    assert stream.closed


def test_next_tag_skips_ignorable_events() -> None:
    reader = _reader("<!--lead--><r>\n  <!--x--><?pi?>\n  <c/></r>")
    first = reader.next_tag()
    assert isinstance(first, StartElement)
    assert first.name.local_part == "r"
    second = reader.next_tag()
    assert isinstance(second, StartElement)
    assert second.name.local_part == "c"
    assert reader.next_tag().is_end_element
    assert reader.next_tag().is_end_element
    assert reader.next_tag().is_end_document


def test_next_tag_rejects_text() -> None:
    reader = _reader("<r>text<c/></r>")
    reader.next_tag()
    with pytest.raises(XMLStreamError):
        reader.next_tag()


def test_get_element_text() -> None:
    reader = _reader("<r><t>one<!--skip--> two</t></r>")
    reader.next_tag()
    reader.next_tag()
    assert reader.get_element_text() == "one two"
    assert reader.next_tag().is_end_element


def test_get_element_text_requires_start_tag() -> None:
    reader = _reader("<r/>")
    reader.next_event()  # start of document
    with pytest.raises(XMLStreamError):
        reader.get_element_text()


def test_get_element_text_rejects_child_elements() -> None:
    reader = _reader("<r><t>one<b/></t></r>")
    reader.next_tag()
    reader.next_tag()
    with pytest.raises(XMLStreamError):
        reader.get_element_text()
