"""Feed – immutable value objects for events, entries, links and pages."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum

RECENT_FEED_ID = "recent"
FEED_TITLE = "Event store feed"
ENTRY_TITLE = "event"


class LinkRel(str, Enum):
    """Atom / RFC 5005 link relations used by the feed."""

    SELF = "self"
    RELATED = "related"
    PREV_ARCHIVE = "prev-archive"
    NEXT_ARCHIVE = "next-archive"


@dataclasses.dataclass(frozen=True)
class Event:
    """An immutable fact read from the event store.

    ``(aggregate_id, version)`` is globally unique.
    """

    aggregate_id: str
    version: int
    type_code: str
    timestamp: datetime
    payload: bytes


@dataclasses.dataclass(frozen=True)
class Link:
    rel: LinkRel
    href: str


@dataclasses.dataclass(frozen=True)
class EntryContent:
    """Entry body: the event type code and the base64-encoded payload."""

    type_kind: str
    body: str


@dataclasses.dataclass(frozen=True)
class FeedEntry:
    """Published representation of one :class:`Event`."""

    id: str
    title: str
    published: str
    content: EntryContent
    links: tuple[Link, ...]

    @property
    def self_link(self) -> str:
        return next(link.href for link in self.links if link.rel is LinkRel.SELF)


@dataclasses.dataclass(frozen=True)
class FeedPage:
    """Either the mutable ``recent`` page or an immutable archive page."""

    id: str
    title: str
    links: tuple[Link, ...]
    entries: tuple[FeedEntry, ...]
    updated: str | None = None

    @property
    def is_recent(self) -> bool:
        return self.id == RECENT_FEED_ID

    def link(self, rel: LinkRel) -> str | None:
        """Return the href for *rel*, or ``None`` when the page has no such link."""
        for link in self.links:
            if link.rel is rel:
                return link.href
        return None


@dataclasses.dataclass(frozen=True)
class EventDocument:
    """Single-event document served at ``/events/{aggregateId}/{version}``."""

    aggregate_id: str
    version: int
    published: datetime
    typecode: str
    content: str

    @property
    def natural_key(self) -> str:
        return f"{self.aggregate_id}:{self.version}"


__all__ = [
    "ENTRY_TITLE",
    "FEED_TITLE",
    "RECENT_FEED_ID",
    "EntryContent",
    "Event",
    "EventDocument",
    "FeedEntry",
    "FeedPage",
    "Link",
    "LinkRel",
]
