"""Consumer – decrypting feed reader."""
from es_atompub.consumer.reader import FeedReader

__all__ = ["FeedReader"]
