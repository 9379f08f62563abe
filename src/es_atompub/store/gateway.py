"""Store – FeedStoreGateway port.

The read side of the event/feed store.  Which events belong to which
archive page is decided elsewhere; this port only reads the outcome.
"""
from __future__ import annotations

import abc

from es_atompub.feed.model import Event
from es_atompub.kernel.errors import NotFoundError, StoreError
from es_atompub.kernel.types import Option, Result


class FeedStoreGateway(abc.ABC):
    """Port: read-only queries against the event and feed tables.

    Implementations raise :class:`StoreError` on infrastructure failure and
    must be safe to share between concurrent requests.
    """

    @abc.abstractmethod
    async def retrieve_recent(self) -> list[Event]:
        """Events not yet assigned to an archive page, oldest first."""

    @abc.abstractmethod
    async def retrieve_last_feed(self) -> str:
        """Id of the newest archive page, or ``""`` when none exists yet."""

    @abc.abstractmethod
    async def retrieve_archive(self, feed_id: str) -> list[Event]:
        """Events of archive *feed_id*; empty means no such archive."""

    @abc.abstractmethod
    async def retrieve_previous_feed(self, feed_id: str) -> Option[str]: ...

    @abc.abstractmethod
    async def retrieve_next_feed(self, feed_id: str) -> Option[str]: ...

    @abc.abstractmethod
    async def retrieve_event(
        self, aggregate_id: str, version: int
    ) -> Result[Event, NotFoundError | StoreError]: ...

    async def ping(self) -> None:
        """Raise :class:`StoreError` when the store is unreachable."""


__all__ = ["FeedStoreGateway"]
