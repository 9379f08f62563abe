from __future__ import annotations

from dataclasses import dataclass, field

from es_atompub.observability.health.check import HealthCheck, HealthStatus
from es_atompub.observability.logging import get_logger

__all__ = ["HealthReport", "HealthRegistry"]

logger = get_logger(__name__)


@dataclass
class HealthReport:
    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def overall(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict:
        """Binary outcome only; per-check detail stays in the logs."""
        return {"status": "ok" if self.overall else "unhealthy"}


class HealthRegistry:
    """Runs registered health checks and aggregates results."""

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    async def run_all(self) -> HealthReport:
        report = HealthReport()
        for check in self._checks:
            try:
                status = await check.timed_check()
            except Exception as exc:  # noqa: BLE001
                status = HealthStatus.failed(f"exception: {exc}")
            if not status.healthy:
                logger.warning(
                    "health check failed",
                    check=check.name,
                    detail=status.detail,
                    latency_ms=status.latency_ms,
                )
            report.results[check.name] = status
        return report
