"""Unit tests for CorrelationContext."""
from __future__ import annotations

import uuid

import pytest

from es_atompub.observability.correlation import CorrelationContext, RequestContext


@pytest.fixture(autouse=True)
def _clear() -> None:
    CorrelationContext.clear()


class TestSetFromHeaders:
    def test_correlation_header_wins(self) -> None:
        ctx = CorrelationContext.set_from_headers({"X-Correlation-ID": "c-1", "X-Request-ID": "r-1"})
        assert ctx.correlation_id == "c-1"
        assert CorrelationContext.get() == ctx

    def test_request_id_fallback(self) -> None:
        assert CorrelationContext.set_from_headers({"x-request-id": "r-1"}).correlation_id == "r-1"

    def test_traceparent(self) -> None:
        ctx = CorrelationContext.set_from_headers(
            {"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"}
        )
        assert ctx.correlation_id == "4bf92f3577b34da6a3ce929d0e0e4736"
        assert ctx.trace_id == ctx.correlation_id

    def test_generated(self) -> None:
        ctx = CorrelationContext.set_from_headers({})
        uuid.UUID(ctx.correlation_id)

    def test_clear(self) -> None:
        CorrelationContext.set(RequestContext.new())
        CorrelationContext.clear()
        assert CorrelationContext.get() is None
