"""Unit tests for FeedResourceHandlers."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from es_atompub.application.handlers import MAX_VERSION, FeedResourceHandlers, parse_version
from es_atompub.feed import Event, FeedAssembler, LinkRel, parse_event, parse_feed
from es_atompub.kernel.errors import KeyServiceError, NotFoundError, StoreError, ValidationError
from es_atompub.kernel.time import FrozenClock
from es_atompub.security.encryption import EnvelopeCipher, EnvelopeDecrypter
from es_atompub.testing.fakes import FakeKeyManagementClient, InMemoryFeedStore

TS = datetime(2024, 4, 30, 8, 0, 0, tzinfo=UTC)


def ev(aggregate_id: str, version: int) -> Event:
    return Event(aggregate_id, version, "foo", TS, b"yeah ok")


@pytest.fixture
def store() -> InMemoryFeedStore:
    store = InMemoryFeedStore()
    store.seed_archive("A", [ev("a", 1)])
    store.seed_archive("B", [ev("a", 2), ev("b", 1)], previous="A")
    store.seed_recent([ev("c", 1)])
    return store


def make_handlers(store: InMemoryFeedStore, cipher: EnvelopeCipher | None = None) -> FeedResourceHandlers:
    assembler = FeedAssembler("localhost:5000", "http", clock=FrozenClock(datetime(2024, 5, 1, tzinfo=UTC)))
    return FeedResourceHandlers(store, cipher or EnvelopeCipher.disabled(), assembler)


class TestParseVersion:
    def test_decimal(self) -> None:
        assert parse_version("12") == 12
        assert parse_version("0007") == 7

    @pytest.mark.parametrize("raw", ["abc", "-1", "", "1.5", "١"])
    def test_rejects(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            parse_version(raw)

    def test_upper_bound(self) -> None:
        assert parse_version("2147483647") == MAX_VERSION

    @pytest.mark.parametrize("raw", ["2147483648", "99999999999", "1" * 5000])
    def test_rejects_out_of_range(self, raw: str) -> None:
        with pytest.raises(ValidationError, match="out of range"):
            parse_version(raw)


class TestRecent:
    def test_recent_page(self, store: InMemoryFeedStore) -> None:
        response = asyncio.run(make_handlers(store).recent())
        page = parse_feed(response.body)

        assert page.id == "recent"
        assert [e.id for e in page.entries] == ["urn:esid:c:1"]
        assert page.link(LinkRel.PREV_ARCHIVE) == "http://localhost:5000/notifications/B"
        assert response.headers == {"Cache-Control": "no-store"}
        assert response.media_type == "application/atom+xml"

    def test_recent_without_archives(self) -> None:
        store = InMemoryFeedStore().seed_recent([ev("c", 1)])
        page = parse_feed(asyncio.run(make_handlers(store).recent()).body)
        assert page.link(LinkRel.PREV_ARCHIVE) is None

    def test_store_failure(self, store: InMemoryFeedStore) -> None:
        store.fail_with(StoreError("retrieve_recent"))
        with pytest.raises(StoreError):
            asyncio.run(make_handlers(store).recent())


class TestArchive:
    def test_middle_of_chain(self, store: InMemoryFeedStore) -> None:
        response = asyncio.run(make_handlers(store).archive("B"))
        page = parse_feed(response.body)

        assert [e.id for e in page.entries] == ["urn:esid:a:2", "urn:esid:b:1"]
        assert page.link(LinkRel.PREV_ARCHIVE) == "http://localhost:5000/notifications/A"
        assert page.link(LinkRel.NEXT_ARCHIVE) == "http://localhost:5000/notifications/recent"
        assert response.headers == {"Cache-Control": "max-age=2592000", "ETag": "B"}

    def test_three_archive_chain(self, store: InMemoryFeedStore) -> None:
        store.seed_archive("C", [ev("d", 1)], previous="B")
        handlers = make_handlers(store)

        middle = parse_feed(asyncio.run(handlers.archive("B")).body)
        newest = parse_feed(asyncio.run(handlers.archive("C")).body)
        recent = parse_feed(asyncio.run(handlers.recent()).body)

        assert middle.link(LinkRel.PREV_ARCHIVE) == "http://localhost:5000/notifications/A"
        assert middle.link(LinkRel.NEXT_ARCHIVE) == "http://localhost:5000/notifications/C"
        assert newest.link(LinkRel.NEXT_ARCHIVE) == "http://localhost:5000/notifications/recent"
        assert recent.link(LinkRel.PREV_ARCHIVE) == "http://localhost:5000/notifications/C"

    def test_oldest_archive_links_forward(self, store: InMemoryFeedStore) -> None:
        page = parse_feed(asyncio.run(make_handlers(store).archive("A")).body)
        assert page.link(LinkRel.PREV_ARCHIVE) is None
        assert page.link(LinkRel.NEXT_ARCHIVE) == "http://localhost:5000/notifications/B"

    def test_unknown_feed(self, store: InMemoryFeedStore) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(make_handlers(store).archive("feed-xxx"))

    def test_empty_feed_id(self, store: InMemoryFeedStore) -> None:
        with pytest.raises(ValidationError, match="No feed id in uri"):
            asyncio.run(make_handlers(store).archive(""))
        assert store.calls == []

    def test_not_found_skips_linkage_queries(self, store: InMemoryFeedStore) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(make_handlers(store).archive("feed-xxx"))
        assert store.calls == ["retrieve_archive"]

    def test_repeated_fetches_identical(self, store: InMemoryFeedStore) -> None:
        handlers = make_handlers(store)
        assert asyncio.run(handlers.archive("B")).body == asyncio.run(handlers.archive("B")).body


class TestEvent:
    def test_event_document(self, store: InMemoryFeedStore) -> None:
        response = asyncio.run(make_handlers(store).event("a", "2"))
        document = parse_event(response.body)

        assert document.aggregate_id == "a"
        assert document.version == 2
        assert document.content == "eWVhaCBvaw=="
        assert response.headers == {"Cache-Control": "max-age=2592000", "ETag": "a:2"}
        assert response.media_type == "application/xml"

    def test_invalid_version_skips_store(self, store: InMemoryFeedStore) -> None:
        with pytest.raises(ValidationError):
            asyncio.run(make_handlers(store).event("a", "abc"))
        assert store.calls == []

    def test_missing_event(self, store: InMemoryFeedStore) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(make_handlers(store).event("a", "99"))

    def test_store_failure(self, store: InMemoryFeedStore) -> None:
        store.fail_with(StoreError("retrieve_event"))
        with pytest.raises(StoreError):
            asyncio.run(make_handlers(store).event("a", "1"))


class TestEncryptedResponses:
    def test_headers_unchanged_and_body_decrypts(self, store: InMemoryFeedStore) -> None:
        kms = FakeKeyManagementClient()
        plain = asyncio.run(make_handlers(store).archive("B"))
        encrypted = asyncio.run(make_handlers(store, EnvelopeCipher(kms, "feed-key")).archive("B"))

        assert encrypted.headers == plain.headers
        assert encrypted.media_type == plain.media_type
        assert asyncio.run(EnvelopeDecrypter(kms).decrypt(encrypted.body)) == plain.body

    def test_key_service_failure(self, store: InMemoryFeedStore) -> None:
        kms = FakeKeyManagementClient().fail_with(KeyServiceError("generate_data_key"))
        with pytest.raises(KeyServiceError):
            asyncio.run(make_handlers(store, EnvelopeCipher(kms, "feed-key")).recent())


class TestPing:
    def test_ping_has_no_dependencies(self, store: InMemoryFeedStore) -> None:
        store.fail_with(StoreError("ping"))
        asyncio.run(make_handlers(store).ping())
        assert store.calls == []
