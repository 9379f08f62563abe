"""Store – SQLAlchemyFeedStore.

Schema (owned by the feed-assignment writer, not by this package)::

    atom_event(id, aggregate_id, version, typecode, payload, event_time, feedid)
    feed(id, event_time, feedid, previous)

An event with ``feedid IS NULL`` is still on the recent page.  Archive
pages form a singly linked list through ``feed.previous``; the successor
of a page is the row whose ``previous`` names it.
"""
from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    func,
    select,
    text,
)
from sqlalchemy.exc import SQLAlchemyError

from es_atompub.feed.model import Event
from es_atompub.kernel.errors import NotFoundError, StoreError
from es_atompub.kernel.types import Err, Ok, Option, Result, option_of
from es_atompub.observability.logging import get_logger
from es_atompub.store.gateway import FeedStoreGateway

logger = get_logger(__name__)

metadata = MetaData()

atom_event = Table(
    "atom_event",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("aggregate_id", String(256), nullable=False),
    Column("version", Integer, nullable=False),
    Column("typecode", String(256), nullable=False),
    Column("payload", LargeBinary, nullable=False),
    Column("event_time", DateTime(timezone=True), nullable=False),
    Column("feedid", String(256), nullable=True, index=True),
    UniqueConstraint("aggregate_id", "version", name="uq_atom_event_aggregate_version"),
)

feed = Table(
    "feed",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_time", DateTime(timezone=True), nullable=False),
    Column("feedid", String(256), nullable=False, unique=True),
    Column("previous", String(256), nullable=True),
)

_EVENT_COLUMNS = (
    atom_event.c.aggregate_id,
    atom_event.c.version,
    atom_event.c.typecode,
    atom_event.c.payload,
    atom_event.c.event_time,
)


def _to_event(row: Any) -> Event:
    return Event(
        aggregate_id=row.aggregate_id,
        version=row.version,
        type_code=row.typecode,
        timestamp=row.event_time,
        payload=bytes(row.payload),
    )


class SQLAlchemyFeedStore(FeedStoreGateway):
    """Read-only :class:`FeedStoreGateway` over SQLAlchemy Core.

    Parameters
    ----------
    session_factory:
        Zero-argument callable returning an async session context manager
        (e.g. :class:`~es_atompub.store.session.SqlAlchemySessionFactory`).
        Every query opens its own session so the store can be shared across
        concurrent requests.
    """

    def __init__(self, session_factory: Callable[[], Any]) -> None:
        self._session_factory = session_factory

    @staticmethod
    async def create_tables(bind: Any) -> None:
        """Create the ``atom_event`` and ``feed`` tables (tests / local setup)."""
        async with bind.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def _fetch(self, operation: str, stmt: Any) -> list[Any]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return list(result.fetchall())
        except SQLAlchemyError as exc:
            logger.warning("store query failed", operation=operation, error=str(exc))
            raise StoreError(operation, cause=exc) from exc

    # ------------------------------------------------------------------
    # FeedStoreGateway interface
    # ------------------------------------------------------------------

    async def retrieve_recent(self) -> list[Event]:
        stmt = select(*_EVENT_COLUMNS).where(atom_event.c.feedid.is_(None)).order_by(atom_event.c.id)
        return [_to_event(row) for row in await self._fetch("retrieve_recent", stmt)]

    async def retrieve_last_feed(self) -> str:
        newest = select(func.max(feed.c.id)).scalar_subquery()
        stmt = select(feed.c.feedid).where(feed.c.id == newest)
        rows = await self._fetch("retrieve_last_feed", stmt)
        return rows[0].feedid if rows else ""

    async def retrieve_archive(self, feed_id: str) -> list[Event]:
        stmt = select(*_EVENT_COLUMNS).where(atom_event.c.feedid == feed_id).order_by(atom_event.c.id)
        return [_to_event(row) for row in await self._fetch("retrieve_archive", stmt)]

    async def retrieve_previous_feed(self, feed_id: str) -> Option[str]:
        stmt = select(feed.c.previous).where(feed.c.feedid == feed_id)
        rows = await self._fetch("retrieve_previous_feed", stmt)
        return option_of(rows[0].previous if rows else None)

    async def retrieve_next_feed(self, feed_id: str) -> Option[str]:
        stmt = select(feed.c.feedid).where(feed.c.previous == feed_id)
        rows = await self._fetch("retrieve_next_feed", stmt)
        return option_of(rows[0].feedid if rows else None)

    async def retrieve_event(
        self, aggregate_id: str, version: int
    ) -> Result[Event, NotFoundError | StoreError]:
        stmt = select(*_EVENT_COLUMNS).where(
            atom_event.c.aggregate_id == aggregate_id,
            atom_event.c.version == version,
        )
        try:
            rows = await self._fetch("retrieve_event", stmt)
        except StoreError as exc:
            return Err(exc)
        if not rows:
            return Err(NotFoundError("event", f"{aggregate_id}:{version}"))
        return Ok(_to_event(rows[0]))

    async def ping(self) -> None:
        await self._fetch("ping", text("SELECT 1"))


__all__ = ["SQLAlchemyFeedStore", "atom_event", "feed", "metadata"]
