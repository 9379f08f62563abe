"""Feed – model, assembly, cache headers and XML serialization."""
from es_atompub.feed.assembler import FeedAssembler, entry_id, normalize_next_feed
from es_atompub.feed.cache_policy import (
    ATOM_MEDIA_TYPE,
    XML_MEDIA_TYPE,
    CacheDirectives,
    CachePolicy,
    ResourceClass,
)
from es_atompub.feed.model import (
    RECENT_FEED_ID,
    EntryContent,
    Event,
    EventDocument,
    FeedEntry,
    FeedPage,
    Link,
    LinkRel,
)
from es_atompub.feed.serializer import parse_event, parse_feed, serialize_event, serialize_feed

__all__ = [
    "ATOM_MEDIA_TYPE",
    "RECENT_FEED_ID",
    "XML_MEDIA_TYPE",
    "CacheDirectives",
    "CachePolicy",
    "EntryContent",
    "Event",
    "EventDocument",
    "FeedAssembler",
    "FeedEntry",
    "FeedPage",
    "Link",
    "LinkRel",
    "ResourceClass",
    "entry_id",
    "normalize_next_feed",
    "parse_event",
    "parse_feed",
    "serialize_event",
    "serialize_feed",
]
