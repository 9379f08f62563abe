"""Testing fakes – InMemoryFeedStore."""
from __future__ import annotations

from es_atompub.feed.model import Event
from es_atompub.kernel.errors import NotFoundError, StoreError
from es_atompub.kernel.types import Err, Ok, Option, Result, option_of
from es_atompub.store.gateway import FeedStoreGateway


class InMemoryFeedStore(FeedStoreGateway):
    """Dict-backed :class:`FeedStoreGateway`.

    Use :meth:`seed_recent` and :meth:`seed_archive` to lay out pages before
    running the code under test, and :meth:`fail_with` to make every query
    raise.

    Usage::

        store = InMemoryFeedStore()
        store.seed_archive("feed-1", [event_a])
        store.seed_archive("feed-2", [event_b], previous="feed-1")
        store.seed_recent([event_c])
    """

    def __init__(self) -> None:
        self._recent: list[Event] = []
        self._archives: dict[str, list[Event]] = {}
        self._previous: dict[str, str | None] = {}
        self._order: list[str] = []
        self._error: StoreError | None = None
        self.calls: list[str] = []

    # ------------------------------------------------------------------
    # Test-setup helpers
    # ------------------------------------------------------------------

    def seed_recent(self, events: list[Event]) -> "InMemoryFeedStore":
        self._recent = list(events)
        return self

    def seed_archive(
        self, feed_id: str, events: list[Event], previous: str | None = None
    ) -> "InMemoryFeedStore":
        """Register archive *feed_id*; the last seeded archive is the newest."""
        self._archives[feed_id] = list(events)
        self._previous[feed_id] = previous
        self._order.append(feed_id)
        return self

    def fail_with(self, error: StoreError | None) -> "InMemoryFeedStore":
        self._error = error
        return self

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self._error is not None:
            raise self._error

    # ------------------------------------------------------------------
    # FeedStoreGateway interface
    # ------------------------------------------------------------------

    async def retrieve_recent(self) -> list[Event]:
        self._check("retrieve_recent")
        return list(self._recent)

    async def retrieve_last_feed(self) -> str:
        self._check("retrieve_last_feed")
        return self._order[-1] if self._order else ""

    async def retrieve_archive(self, feed_id: str) -> list[Event]:
        self._check("retrieve_archive")
        return list(self._archives.get(feed_id, []))

    async def retrieve_previous_feed(self, feed_id: str) -> Option[str]:
        self._check("retrieve_previous_feed")
        return option_of(self._previous.get(feed_id))

    async def retrieve_next_feed(self, feed_id: str) -> Option[str]:
        self._check("retrieve_next_feed")
        successor = next((f for f, prev in self._previous.items() if prev == feed_id), None)
        return option_of(successor)

    async def retrieve_event(
        self, aggregate_id: str, version: int
    ) -> Result[Event, NotFoundError | StoreError]:
        try:
            self._check("retrieve_event")
        except StoreError as exc:
            return Err(exc)
        for event in [*self._recent, *(e for events in self._archives.values() for e in events)]:
            if event.aggregate_id == aggregate_id and event.version == version:
                return Ok(event)
        return Err(NotFoundError("event", f"{aggregate_id}:{version}"))

    async def ping(self) -> None:
        self._check("ping")


__all__ = ["InMemoryFeedStore"]
