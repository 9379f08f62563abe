"""Observability – Health Checks."""
from es_atompub.observability.health.builtin import (
    KeyServiceHealthCheck,
    StoreHealthCheck,
)
from es_atompub.observability.health.check import HealthCheck, HealthStatus
from es_atompub.observability.health.registry import HealthRegistry, HealthReport

__all__ = [
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "KeyServiceHealthCheck",
    "StoreHealthCheck",
]
