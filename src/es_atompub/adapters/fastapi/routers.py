"""FastAPI adapter – feed, ping and health routers."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from es_atompub.application import FeedResourceHandlers, FeedResponse
from es_atompub.feed import RECENT_FEED_ID
from es_atompub.observability.health import HealthRegistry

PING_PATH = "/ping"
RECENT_PATH = f"/notifications/{RECENT_FEED_ID}"
ARCHIVE_PATH = "/notifications/{feed_id}"
EVENT_PATH = "/events/{aggregate_id}/{version}"


def _to_response(result: FeedResponse) -> Response:
    return Response(content=result.body, media_type=result.media_type, headers=result.headers)


def FastAPIFeedRouter(handlers: FeedResourceHandlers, tags: list[str] | None = None) -> Any:
    """Return the router serving the recent page, archives and single events.

    ``/notifications/recent`` is declared before the archive route so the
    literal path wins over the ``{feed_id}`` pattern.
    """
    router = APIRouter(tags=tags or ["feed"])

    @router.get(RECENT_PATH)
    async def recent() -> Response:
        return _to_response(await handlers.recent())

    @router.get("/notifications/")
    async def archive_without_id() -> Response:
        return _to_response(await handlers.archive(""))

    @router.get(ARCHIVE_PATH)
    async def archive(feed_id: str) -> Response:
        return _to_response(await handlers.archive(feed_id))

    @router.get(EVENT_PATH)
    async def event(aggregate_id: str, version: str) -> Response:
        return _to_response(await handlers.event(aggregate_id, version))

    @router.get(PING_PATH)
    async def ping() -> Response:
        await handlers.ping()
        return Response(status_code=200)

    return router


def FastAPIHealthRouter(registry: HealthRegistry, path: str = "/health", tags: list[str] | None = None) -> Any:
    """Return the readiness router.

    200 when every registered check passes, 500 otherwise; the body only
    says which of the two it is.
    """
    router = APIRouter(tags=tags or ["ops"])

    @router.get(path)
    async def health() -> Any:
        report = await registry.run_all()
        return JSONResponse(status_code=200 if report.overall else 500, content=report.to_dict())

    return router


__all__ = [
    "ARCHIVE_PATH",
    "EVENT_PATH",
    "PING_PATH",
    "RECENT_PATH",
    "FastAPIFeedRouter",
    "FastAPIHealthRouter",
]
