"""Feed – XML wire format for feed pages and event documents.

Feeds are Atom (``http://www.w3.org/2005/Atom``); a single event is an
``event`` element in the ``http://github.com/xtracdev/goes`` namespace.
The ``parse_*`` helpers are the inverse, used by feed consumers.
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import datetime

from es_atompub.feed.model import EntryContent, EventDocument, FeedEntry, FeedPage, Link, LinkRel
from es_atompub.kernel.errors import SerializationError
from es_atompub.kernel.time import format_rfc3339

ATOM_NS = "http://www.w3.org/2005/Atom"
EVENT_NS = "http://github.com/xtracdev/goes"

# Anything outside the XML 1.0 Char production, lone surrogates included.
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
REPLACEMENT_CHAR = "\ufffd"


def xml_safe(value: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub(REPLACEMENT_CHAR, value)


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    child = ET.SubElement(parent, tag)
    child.text = xml_safe(value)
    return child


def _links(parent: ET.Element, links: tuple[Link, ...]) -> None:
    for link in links:
        ET.SubElement(parent, "link", rel=link.rel.value, href=xml_safe(link.href))


def _entry(parent: ET.Element, entry: FeedEntry) -> None:
    node = ET.SubElement(parent, "entry")
    _text(node, "title", entry.title)
    _text(node, "id", entry.id)
    _links(node, entry.links)
    _text(node, "published", entry.published)
    content = _text(node, "content", entry.content.body)
    content.set("type", xml_safe(entry.content.type_kind))


def serialize_feed(page: FeedPage) -> bytes:
    """Serialize *page* as an Atom ``feed`` document."""
    try:
        root = ET.Element("feed", xmlns=ATOM_NS)
        _text(root, "title", page.title)
        _text(root, "id", page.id)
        _links(root, page.links)
        if page.updated:
            _text(root, "updated", page.updated)
        for entry in page.entries:
            _entry(root, entry)
        return ET.tostring(root, encoding="utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Failed to serialize feed '{page.id}'", payload_type="feed", cause=exc
        ) from exc


def serialize_event(document: EventDocument) -> bytes:
    """Serialize a single event document."""
    try:
        root = ET.Element("event", xmlns=EVENT_NS)
        _text(root, "aggregateId", document.aggregate_id)
        _text(root, "version", str(document.version))
        _text(root, "published", format_rfc3339(document.published))
        _text(root, "typecode", document.typecode)
        _text(root, "content", document.content)
        return ET.tostring(root, encoding="utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Failed to serialize event '{document.natural_key}'", payload_type="event", cause=exc
        ) from exc


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _q(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


def _find_text(node: ET.Element, ns: str, tag: str) -> str:
    child = node.find(_q(ns, tag))
    if child is None:
        return ""
    return child.text or ""


def _parse_links(node: ET.Element) -> tuple[Link, ...]:
    return tuple(
        Link(LinkRel(link.get("rel", "")), link.get("href", ""))
        for link in node.findall(_q(ATOM_NS, "link"))
    )


def parse_feed(raw: bytes) -> FeedPage:
    """Parse an Atom document produced by :func:`serialize_feed`."""
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise SerializationError("Malformed feed document", payload_type="feed", cause=exc) from exc

    entries = []
    for node in root.findall(_q(ATOM_NS, "entry")):
        content = node.find(_q(ATOM_NS, "content"))
        entries.append(
            FeedEntry(
                id=_find_text(node, ATOM_NS, "id"),
                title=_find_text(node, ATOM_NS, "title"),
                published=_find_text(node, ATOM_NS, "published"),
                content=EntryContent(
                    type_kind=content.get("type", "") if content is not None else "",
                    body=(content.text or "") if content is not None else "",
                ),
                links=_parse_links(node),
            )
        )

    return FeedPage(
        id=_find_text(root, ATOM_NS, "id"),
        title=_find_text(root, ATOM_NS, "title"),
        links=_parse_links(root),
        entries=tuple(entries),
        updated=_find_text(root, ATOM_NS, "updated") or None,
    )


def parse_event(raw: bytes) -> EventDocument:
    """Parse an event document produced by :func:`serialize_event`."""
    try:
        root = ET.fromstring(raw)
        return EventDocument(
            aggregate_id=_find_text(root, EVENT_NS, "aggregateId"),
            version=int(_find_text(root, EVENT_NS, "version")),
            published=datetime.fromisoformat(_find_text(root, EVENT_NS, "published")),
            typecode=_find_text(root, EVENT_NS, "typecode"),
            content=_find_text(root, EVENT_NS, "content"),
        )
    except (ET.ParseError, ValueError) as exc:
        raise SerializationError("Malformed event document", payload_type="event", cause=exc) from exc


__all__ = [
    "ATOM_NS",
    "EVENT_NS",
    "REPLACEMENT_CHAR",
    "parse_event",
    "parse_feed",
    "serialize_event",
    "serialize_feed",
    "xml_safe",
]
