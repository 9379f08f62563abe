"""Application – request pipelines for the feed resources."""
from es_atompub.application.handlers import FeedResourceHandlers, FeedResponse, parse_version

__all__ = ["FeedResourceHandlers", "FeedResponse", "parse_version"]
