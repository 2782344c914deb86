# xistream:header:start
#
#   project      : XIStream
#   file         : render.py
#   file_relpath : src/xistream/cli/render.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Rendering of events for the ``events`` command.

Two renderings are provided:
    - `event_to_text`: one human-readable line per event.
    - `event_to_dict`: a JSON-serializable mapping, used for JSON and NDJSON.

Names are written in Clark notation (``{namespace}local``) in machine output so
that they are unambiguous regardless of the prefixes used in the source.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from xistream.stax.events import (
    DTD,
    Characters,
    Comment,
    EndElement,
    ProcessingInstruction,
    StartDocument,
    StartElement,
)

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike
    from xistream.stax.events import Location, XMLEvent


def _location_to_dict(location: Location | None) -> dict[str, Any] | None:
    if location is None:
        return None
    return {"line": location.line, "column": location.column, "system_id": location.system_id}


def event_to_dict(event: XMLEvent, *, with_location: bool = False) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``event``.

    Args:
        event (XMLEvent): The event to render.
        with_location (bool): Include a ``location`` entry.

    Returns:
        dict[str, Any]: Mapping with a ``type`` key (the `EventType` name) plus
            the event's own fields.
    """
    out: dict[str, Any] = {"type": event.event_type.name}
    if isinstance(event, StartElement):
        out["name"] = str(event.name)
        out["prefix"] = event.name.prefix
        out["attributes"] = {str(a.name): a.value for a in event.attributes}
        if event.namespaces:
            out["namespaces"] = {prefix: uri for prefix, uri in event.namespaces}
    elif isinstance(event, EndElement):
        out["name"] = str(event.name)
    elif isinstance(event, Characters):
        out["data"] = event.data
        if event.is_cdata:
            out["cdata"] = True
    elif isinstance(event, Comment):
        out["text"] = event.text
    elif isinstance(event, ProcessingInstruction):
        out["target"] = event.target
        out["data"] = event.data
    elif isinstance(event, StartDocument):
        out["version"] = event.version
        out["encoding"] = event.encoding
        out["standalone"] = event.standalone
        out["system_id"] = event.system_id
    elif isinstance(event, DTD):
        out["name"] = event.name
        out["system_id"] = event.system_id
        out["public_id"] = event.public_id
    if with_location:
        out["location"] = _location_to_dict(event.location)
    return out


def event_to_text(event: XMLEvent, console: ConsoleLike, *, with_location: bool = False) -> str:
    """Return a one-line, human-readable rendering of ``event``.

    Args:
        event (XMLEvent): The event to render.
        console (ConsoleLike): Console used for styling.
        with_location (bool): Append the source location.

    Returns:
        str: The rendered line.
    """
    kind: str = console.styled(f"{event.event_type.name:<22}", bold=True)
    detail: str
    if isinstance(event, StartElement):
        detail = console.styled(str(event), fg="cyan")
    elif isinstance(event, EndElement):
        detail = console.styled(f"</{event.name.qualified_name}>", fg="cyan")
    elif isinstance(event, Characters):
        detail = json.dumps(event.data, ensure_ascii=False)
        if event.is_cdata:
            detail = f"CDATA {detail}"
    elif isinstance(event, Comment):
        detail = console.styled(f"<!--{event.text}-->", dim=True)
    elif isinstance(event, ProcessingInstruction):
        detail = f"<?{event.target} {event.data}?>" if event.data else f"<?{event.target}?>"
    elif isinstance(event, StartDocument):
        detail = f"version={event.version} encoding={event.encoding}"
    elif isinstance(event, DTD):
        detail = f"<!DOCTYPE {event.name}>"
    else:
        detail = ""
    line: str = f"{kind} {detail}".rstrip()
    if with_location and event.location is not None:
        line = f"{line}  {console.styled(f'@ {event.location}', dim=True)}"
    return line
