"""FastAPI adapter – ASGI correlation-id middleware."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from es_atompub.observability.correlation import CorrelationContext

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class FastAPICorrelationIdMiddleware:
    """Extract a correlation ID from request headers and echo it on the response.

    Header resolution order: ``X-Correlation-ID``, ``X-Request-ID``, the
    trace-id of a W3C ``traceparent``, then a generated UUID v4.  The id is
    bound to structlog's contextvars for the duration of the request.
    """

    def __init__(self, app: "ASGIApp", header_name: str = "X-Correlation-ID") -> None:
        self.app = app
        self._response_header = header_name.lower().encode()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
        ctx = CorrelationContext.set_from_headers(headers)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=ctx.correlation_id)

        response_header = self._response_header
        encoded_id = ctx.correlation_id.encode()

        async def send_with_header(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers_list.append((response_header, encoded_id))
                message = {**message, "headers": headers_list}
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            CorrelationContext.clear()


__all__ = ["FastAPICorrelationIdMiddleware"]
