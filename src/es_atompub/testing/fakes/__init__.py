"""Testing fakes."""
from es_atompub.testing.fakes.feed_store import InMemoryFeedStore
from es_atompub.testing.fakes.kms import FakeKeyManagementClient

__all__ = ["FakeKeyManagementClient", "InMemoryFeedStore"]
