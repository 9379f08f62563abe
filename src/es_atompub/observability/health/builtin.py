"""Observability – health checks for the feed store and the key service."""
from __future__ import annotations

from typing import TYPE_CHECKING

from es_atompub.kernel.errors import InfrastructureError
from es_atompub.observability.health.check import HealthCheck, HealthStatus

if TYPE_CHECKING:
    from es_atompub.security.encryption import EnvelopeCipher
    from es_atompub.store import FeedStoreGateway

__all__ = [
    "KeyServiceHealthCheck",
    "StoreHealthCheck",
]


class StoreHealthCheck(HealthCheck):
    """Checks feed store connectivity with a lightweight query."""

    def __init__(self, store: "FeedStoreGateway") -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "database"

    async def check(self) -> HealthStatus:
        try:
            await self._store.ping()
            return HealthStatus.ok()
        except InfrastructureError as exc:
            return HealthStatus.failed(exc.message)


class KeyServiceHealthCheck(HealthCheck):
    """Checks that a data key can be generated under the configured alias."""

    def __init__(self, cipher: "EnvelopeCipher") -> None:
        self._cipher = cipher

    @property
    def name(self) -> str:
        return "key_service"

    async def check(self) -> HealthStatus:
        try:
            await self._cipher.check_health()
            return HealthStatus.ok()
        except InfrastructureError as exc:
            return HealthStatus.failed(exc.message)
