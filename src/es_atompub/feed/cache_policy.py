"""Feed – CachePolicy.

Archive pages and single events never change once they exist, so they
may be cached (including by intermediaries) for thirty days.  The recent
page loses entries as they are archived and must never be cached.
"""
from __future__ import annotations

import dataclasses
from enum import Enum

from es_atompub.feed.model import RECENT_FEED_ID

ATOM_MEDIA_TYPE = "application/atom+xml"
XML_MEDIA_TYPE = "application/xml"

NO_STORE = "no-store"
IMMUTABLE_MAX_AGE = 2592000  # 30 days


class ResourceClass(str, Enum):
    RECENT = "recent"
    ARCHIVE = "archive"
    EVENT = "event"


@dataclasses.dataclass(frozen=True)
class CacheDirectives:
    cache_control: str
    media_type: str
    etag: str | None = None

    def headers(self) -> dict[str, str]:
        headers = {"Cache-Control": self.cache_control}
        if self.etag:
            headers["ETag"] = self.etag
        return headers


class CachePolicy:
    """Pure mapping from a resource to its cache and identity headers."""

    @staticmethod
    def for_resource(resource: ResourceClass, natural_key: str = "") -> CacheDirectives:
        if resource is ResourceClass.RECENT:
            return CacheDirectives(cache_control=NO_STORE, media_type=ATOM_MEDIA_TYPE)
        media_type = ATOM_MEDIA_TYPE if resource is ResourceClass.ARCHIVE else XML_MEDIA_TYPE
        return CacheDirectives(
            cache_control=f"max-age={IMMUTABLE_MAX_AGE}",
            media_type=media_type,
            etag=natural_key,
        )

    @classmethod
    def recent(cls) -> CacheDirectives:
        return cls.for_resource(ResourceClass.RECENT)

    @classmethod
    def archive(cls, feed_id: str) -> CacheDirectives:
        # /notifications/recent also matches the archive route
        if feed_id == RECENT_FEED_ID:
            return cls.recent()
        return cls.for_resource(ResourceClass.ARCHIVE, feed_id)

    @classmethod
    def event(cls, aggregate_id: str, version: int) -> CacheDirectives:
        return cls.for_resource(ResourceClass.EVENT, f"{aggregate_id}:{version}")


__all__ = [
    "ATOM_MEDIA_TYPE",
    "IMMUTABLE_MAX_AGE",
    "NO_STORE",
    "XML_MEDIA_TYPE",
    "CacheDirectives",
    "CachePolicy",
    "ResourceClass",
]
