"""Root error class for the es-atompub error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    ``message`` is what a client may see (400 bodies); ``cause`` and
    ``detail`` only ever reach the logs through :meth:`log_context`.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra key/value context for the log line.
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def log_context(self) -> dict[str, Any]:
        """Flat keyword arguments for a structlog call."""
        context: dict[str, Any] = {"error_code": self.code, "error": self.message, **self.detail}
        if self.cause is not None:
            context["cause"] = repr(self.cause)
        return context


__all__ = ["BaseError"]
