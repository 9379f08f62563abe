"""Unit tests for health checks and the health registry."""
from __future__ import annotations

import asyncio

from structlog.testing import capture_logs

from es_atompub.kernel.errors import KeyServiceError, StoreError
from es_atompub.observability.health import (
    HealthCheck,
    HealthRegistry,
    HealthStatus,
    KeyServiceHealthCheck,
    StoreHealthCheck,
)
from es_atompub.security.encryption import EnvelopeCipher
from es_atompub.testing.fakes import FakeKeyManagementClient, InMemoryFeedStore


class CrashingCheck(HealthCheck):
    @property
    def name(self) -> str:
        return "crashing"

    async def check(self) -> HealthStatus:
        raise RuntimeError("boom")


def _failing_store() -> InMemoryFeedStore:
    return InMemoryFeedStore().fail_with(StoreError("ping", "connection refused"))


class TestBuiltinChecks:
    def test_store_check_healthy(self) -> None:
        status = asyncio.run(StoreHealthCheck(InMemoryFeedStore()).check())
        assert status.healthy

    def test_store_check_unhealthy(self) -> None:
        status = asyncio.run(StoreHealthCheck(_failing_store()).check())
        assert not status.healthy
        assert status.detail == "connection refused"

    def test_key_service_check_disabled_cipher(self) -> None:
        assert asyncio.run(KeyServiceHealthCheck(EnvelopeCipher.disabled()).check()).healthy

    def test_key_service_check_unreachable(self) -> None:
        kms = FakeKeyManagementClient().fail_with(KeyServiceError("generate_data_key", "unreachable"))
        check = KeyServiceHealthCheck(EnvelopeCipher(kms, "feed-key"))
        assert check.name == "key_service"
        assert not asyncio.run(check.check()).healthy


class TestHealthRegistry:
    def test_empty_registry_is_healthy(self) -> None:
        report = asyncio.run(HealthRegistry().run_all())
        assert report.overall
        assert report.to_dict() == {"status": "ok"}

    def test_one_failure_makes_report_unhealthy(self) -> None:
        registry = HealthRegistry()
        registry.register(KeyServiceHealthCheck(EnvelopeCipher.disabled()))
        registry.register(StoreHealthCheck(_failing_store()))
        report = asyncio.run(registry.run_all())

        assert not report.overall
        assert report.results["key_service"].healthy
        assert not report.results["database"].healthy
        assert report.to_dict() == {"status": "unhealthy"}

    def test_raising_check_captured(self) -> None:
        registry = HealthRegistry()
        registry.register(CrashingCheck())
        report = asyncio.run(registry.run_all())
        assert "boom" in report.results["crashing"].detail

    def test_failure_logged_with_latency(self) -> None:
        registry = HealthRegistry()
        registry.register(StoreHealthCheck(_failing_store()))
        with capture_logs() as logs:
            asyncio.run(registry.run_all())

        failed = [entry for entry in logs if entry["event"] == "health check failed"]
        assert len(failed) == 1
        assert failed[0]["check"] == "database"
        assert failed[0]["detail"] == "connection refused"
        assert failed[0]["latency_ms"] >= 0
