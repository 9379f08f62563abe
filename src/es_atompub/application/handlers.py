"""Application – FeedResourceHandlers.

Each handler is a straight pipeline::

    validate → store → FeedAssembler → serialize → CachePolicy → EnvelopeCipher

Failures are raised as kernel errors before anything is written; the HTTP
adapter turns them into exactly one status code.
"""
from __future__ import annotations

import dataclasses

from es_atompub.feed import (
    CacheDirectives,
    CachePolicy,
    FeedAssembler,
    serialize_event,
    serialize_feed,
)
from es_atompub.kernel.errors import NotFoundError, ValidationError
from es_atompub.observability.logging import get_logger
from es_atompub.security.encryption import EnvelopeCipher
from es_atompub.store import FeedStoreGateway

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class FeedResponse:
    """A fully prepared 200 response."""

    body: bytes
    headers: dict[str, str]
    media_type: str

    @classmethod
    def build(cls, body: bytes, directives: CacheDirectives) -> "FeedResponse":
        return cls(body=body, headers=directives.headers(), media_type=directives.media_type)


# Versions are stored as a signed 32-bit column.
MAX_VERSION = 2**31 - 1


def parse_version(raw: str) -> int:
    """Parse a decimal event version in ``0..MAX_VERSION``."""
    if not raw.isdecimal() or not raw.isascii():
        raise ValidationError(f"Invalid version '{raw}'", parameter="version")
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(str(MAX_VERSION)) or int(digits) > MAX_VERSION:
        raise ValidationError(f"Version '{raw}' out of range", parameter="version")
    return int(digits)


class FeedResourceHandlers:
    """Stateless request pipelines for the recent, archive and event resources."""

    def __init__(
        self,
        store: FeedStoreGateway,
        cipher: EnvelopeCipher,
        assembler: FeedAssembler,
    ) -> None:
        self._store = store
        self._cipher = cipher
        self._assembler = assembler

    async def recent(self) -> FeedResponse:
        events = await self._store.retrieve_recent()
        latest_feed = await self._store.retrieve_last_feed()

        page = self._assembler.build_recent_page(events, latest_feed)
        body = await self._cipher.transform(serialize_feed(page))
        return FeedResponse.build(body, CachePolicy.recent())

    async def archive(self, feed_id: str) -> FeedResponse:
        if not feed_id:
            raise ValidationError("No feed id in uri", parameter="feedId")

        logger.info("processing request for feed", feed_id=feed_id)

        events = await self._store.retrieve_archive(feed_id)
        # Archive ids are only ever created together with their events.
        if not events:
            logger.info("no data found for feed", feed_id=feed_id)
            raise NotFoundError("feed", feed_id)

        previous_feed = await self._store.retrieve_previous_feed(feed_id)
        next_feed = await self._store.retrieve_next_feed(feed_id)

        page = self._assembler.build_archive_page(feed_id, events, previous_feed, next_feed)
        body = await self._cipher.transform(serialize_feed(page))

        directives = CachePolicy.archive(feed_id)
        if directives.etag:
            logger.info("caching archive page", cache_control=directives.cache_control, etag=directives.etag)
        return FeedResponse.build(body, directives)

    async def event(self, aggregate_id: str, version: str) -> FeedResponse:
        logger.info("retrieving event", aggregate_id=aggregate_id, version=version)
        parsed_version = parse_version(version)

        event = (await self._store.retrieve_event(aggregate_id, parsed_version)).unwrap()

        document = self._assembler.build_event_document(aggregate_id, parsed_version, event)
        body = await self._cipher.transform(serialize_event(document))
        return FeedResponse.build(body, CachePolicy.event(aggregate_id, parsed_version))

    async def ping(self) -> None:
        """Liveness: no dependencies, never fails."""


__all__ = ["MAX_VERSION", "FeedResourceHandlers", "FeedResponse", "parse_version"]
