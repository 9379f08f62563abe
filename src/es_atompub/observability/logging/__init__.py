"""Observability – structured logging helpers."""
from es_atompub.observability.logging.factory import JsonLoggerFactory
from es_atompub.observability.logging.filters import SensitiveFieldsFilter
from es_atompub.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = [
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
