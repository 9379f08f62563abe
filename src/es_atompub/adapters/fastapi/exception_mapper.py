"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import PlainTextResponse

from es_atompub.kernel.errors import (
    BaseError,
    InfrastructureError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from es_atompub.observability.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Fixed 500 bodies per failed store query; nothing from the cause leaks out.
STORE_ERROR_MESSAGES: dict[str, str] = {
    "retrieve_recent": "Error retrieving feed items",
    "retrieve_archive": "Error retrieving feed id",
    "retrieve_last_feed": "Error retrieving feed id",
    "retrieve_previous_feed": "Error retrieving previous feed id",
    "retrieve_next_feed": "Error retrieving next feed id",
    "retrieve_event": "Error retrieving event",
}


def server_error_message(exc: InfrastructureError) -> str:
    if isinstance(exc, StoreError):
        return STORE_ERROR_MESSAGES.get(exc.operation, INTERNAL_ERROR_MESSAGE)
    return INTERNAL_ERROR_MESSAGE


class FastAPIExceptionMapper:
    """Register kernel error → HTTP status-code mappings on a FastAPI app.

    Mappings
    --------
    ``ValidationError``     → 400, the validation message as text
    ``NotFoundError``       → 404, empty body
    ``InfrastructureError`` → 500, a fixed message; the cause is logged only
    """

    def __init__(self) -> None:
        self._map: list[tuple[type[Exception], Callable[[Any], Any]]] = [
            (ValidationError, self._bad_request),
            (NotFoundError, self._not_found),
            (InfrastructureError, self._server_error),
        ]

    @staticmethod
    def _bad_request(exc: ValidationError) -> PlainTextResponse:
        logger.info("rejected request", **exc.log_context())
        return PlainTextResponse(exc.message, status_code=400)

    @staticmethod
    def _not_found(exc: NotFoundError) -> PlainTextResponse:  # noqa: ARG004
        return PlainTextResponse("", status_code=404)

    @staticmethod
    def _server_error(exc: BaseError) -> PlainTextResponse:
        logger.warning("request failed", **exc.log_context())
        return PlainTextResponse(server_error_message(exc), status_code=500)

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, render in self._map:

            def make_handler(fn: Callable[[Any], Any]) -> Callable[[Any, Any], Any]:
                def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
                    return fn(exc)

                return handler

            app.add_exception_handler(exc_type, make_handler(render))


__all__ = ["INTERNAL_ERROR_MESSAGE", "STORE_ERROR_MESSAGES", "FastAPIExceptionMapper", "server_error_message"]
