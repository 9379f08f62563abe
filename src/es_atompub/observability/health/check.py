"""Observability – HealthCheck base and HealthStatus."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = ["HealthCheck", "HealthStatus"]


@dataclass
class HealthStatus:
    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0

    @classmethod
    def ok(cls) -> "HealthStatus":
        return cls(healthy=True)

    @classmethod
    def failed(cls, detail: str) -> "HealthStatus":
        return cls(healthy=False, detail=detail)


class HealthCheck(ABC):
    """One dependency probed by ``GET /health``."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> HealthStatus: ...

    async def timed_check(self) -> HealthStatus:
        started = time.perf_counter()
        status = await self.check()
        status.latency_ms = round((time.perf_counter() - started) * 1000, 3)
        return status
