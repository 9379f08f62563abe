"""Feed – FeedAssembler.

Turns store rows into Atom pages whose links form the RFC 5005 archive
chain::

    oldest archive <-prev- ... <-prev- newest archive <-prev- recent
                   -next->     -next->                -next->

The newest archive's ``next-archive`` always points at ``recent``; that
is how a client walking forward from old archives reaches the head.
"""
from __future__ import annotations

import base64
from typing import Iterable

from es_atompub.feed.model import (
    ENTRY_TITLE,
    FEED_TITLE,
    RECENT_FEED_ID,
    EntryContent,
    Event,
    EventDocument,
    FeedEntry,
    FeedPage,
    Link,
    LinkRel,
)
from es_atompub.kernel.time import Clock, SystemClock, format_rfc3339
from es_atompub.kernel.types import Nothing, Option

DEFAULT_LINK_PROTO = "https"


def normalize_next_feed(next_feed: Option[str]) -> str:
    """Resolve the page after *next_feed*'s owner.

    Both an absent and an empty next id mean the owner is the newest
    archive, whose successor is the recent page.
    """
    return next_feed.unwrap_or("") or RECENT_FEED_ID


def entry_id(aggregate_id: str, version: int) -> str:
    return f"urn:esid:{aggregate_id}:{version}"


class FeedAssembler:
    """Build feed pages and event documents with absolute link hrefs.

    Parameters
    ----------
    link_host:
        ``host[:port]`` placed in every href; lets a proxy advertise its own
        address instead of the publisher's.
    link_proto:
        URL scheme for hrefs; empty means ``https``.
    clock:
        Source of the recent page's ``updated`` stamp.
    """

    def __init__(
        self,
        link_host: str,
        link_proto: str = DEFAULT_LINK_PROTO,
        clock: Clock | None = None,
    ) -> None:
        self._link_host = link_host
        self._link_proto = link_proto or DEFAULT_LINK_PROTO
        self._clock = clock or SystemClock()

    def _href(self, path: str) -> str:
        return f"{self._link_proto}://{self._link_host}{path}"

    def feed_href(self, feed_id: str) -> str:
        return self._href(f"/notifications/{feed_id}")

    def event_href(self, aggregate_id: str, version: int) -> str:
        return self._href(f"/events/{aggregate_id}/{version}")

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def build_entry(self, event: Event) -> FeedEntry:
        return FeedEntry(
            id=entry_id(event.aggregate_id, event.version),
            title=ENTRY_TITLE,
            published=format_rfc3339(event.timestamp),
            content=EntryContent(
                type_kind=event.type_code,
                body=base64.b64encode(event.payload).decode("ascii"),
            ),
            links=(Link(LinkRel.SELF, self.event_href(event.aggregate_id, event.version)),),
        )

    def build_entries(self, events: Iterable[Event]) -> tuple[FeedEntry, ...]:
        """Map events 1:1 to entries in store order."""
        return tuple(self.build_entry(event) for event in events)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def build_recent_page(self, events: Iterable[Event], latest_archive_id: str) -> FeedPage:
        recent_href = self.feed_href(RECENT_FEED_ID)
        links = [
            Link(LinkRel.SELF, recent_href),
            Link(LinkRel.RELATED, recent_href),
        ]
        if latest_archive_id:
            links.append(Link(LinkRel.PREV_ARCHIVE, self.feed_href(latest_archive_id)))

        return FeedPage(
            id=RECENT_FEED_ID,
            title=FEED_TITLE,
            links=tuple(links),
            entries=self.build_entries(events),
            updated=format_rfc3339(self._clock.now(), fractional=False),
        )

    def build_archive_page(
        self,
        feed_id: str,
        events: Iterable[Event],
        previous_feed_id: Option[str] | None = None,
        next_feed_id: Option[str] | None = None,
    ) -> FeedPage:
        """Build an archive page.

        Callers must have rejected an empty *events* sequence as not found;
        archive ids never exist without events.
        """
        if previous_feed_id is None:
            previous_feed_id = Nothing()
        if next_feed_id is None:
            next_feed_id = Nothing()

        links = [Link(LinkRel.SELF, self.feed_href(feed_id))]
        for previous in previous_feed_id:
            links.append(Link(LinkRel.PREV_ARCHIVE, self.feed_href(previous)))
        links.append(Link(LinkRel.NEXT_ARCHIVE, self.feed_href(normalize_next_feed(next_feed_id))))

        return FeedPage(
            id=feed_id,
            title=FEED_TITLE,
            links=tuple(links),
            entries=self.build_entries(events),
        )

    # ------------------------------------------------------------------
    # Single event
    # ------------------------------------------------------------------

    def build_event_document(self, aggregate_id: str, version: int, event: Event) -> EventDocument:
        return EventDocument(
            aggregate_id=aggregate_id,
            version=version,
            published=event.timestamp,
            typecode=event.type_code,
            content=base64.b64encode(event.payload).decode("ascii"),
        )


__all__ = ["DEFAULT_LINK_PROTO", "FeedAssembler", "entry_id", "normalize_next_feed"]
