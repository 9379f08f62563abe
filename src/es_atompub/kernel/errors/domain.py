"""Domain errors – bad requests and missing resources."""

from __future__ import annotations

from typing import Any

from es_atompub.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a request cannot be satisfied for a non-infrastructure reason."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """A path parameter is missing or malformed.

    ``parameter`` names the offending parameter when known.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        parameter: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.parameter = parameter
        if parameter is not None:
            self.detail.setdefault("parameter", parameter)


class NotFoundError(DomainError):
    """The requested feed or event does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.detail.setdefault("resource", resource)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
