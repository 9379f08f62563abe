"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from typing import Mapping
from uuid import uuid4

CORRELATION_HEADERS = ("x-correlation-id", "x-request-id")


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ids attached to every log line emitted while serving one request."""

    correlation_id: str
    trace_id: str | None = None

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(correlation_id=str(uuid4()))


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_atompub_request_ctx", default=None)


def _trace_id(traceparent: str | None) -> str | None:
    # W3C traceparent: {version}-{trace-id}-{parent-id}-{flags}
    if not traceparent:
        return None
    parts = traceparent.split("-")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


class CorrelationContext:
    """Per-request :class:`RequestContext` held in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def set_from_headers(headers: Mapping[str, str]) -> RequestContext:
        """Resolve the request's ids from *headers* and make them current.

        The correlation id is the first of ``X-Correlation-ID``,
        ``X-Request-ID``, the ``traceparent`` trace-id, or a fresh UUID.
        Header names are case-insensitive.
        """
        norm = {k.lower(): v.strip() for k, v in headers.items()}
        trace_id = _trace_id(norm.get("traceparent"))
        supplied = next((norm[h] for h in CORRELATION_HEADERS if norm.get(h)), None)

        ctx = RequestContext(correlation_id=supplied or trace_id or str(uuid4()), trace_id=trace_id)
        _CTX_VAR.set(ctx)
        return ctx


__all__ = ["CORRELATION_HEADERS", "CorrelationContext", "RequestContext"]
