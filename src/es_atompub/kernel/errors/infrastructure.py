"""Infrastructure errors – store, key service and encoding failures."""

from __future__ import annotations

from typing import Any

from es_atompub.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a client mistake."""

    default_code = "infrastructure_error"


class StoreError(InfrastructureError):
    """A query against the event/feed store failed."""

    default_code = "store_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Store operation '{operation}' failed", **kwargs)
        self.detail.setdefault("operation", operation)
        self.operation = operation


class KeyServiceError(InfrastructureError):
    """The key-management service failed to generate or decrypt a data key."""

    default_code = "key_service_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        *,
        key_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Key service operation '{operation}' failed", **kwargs)
        self.detail.setdefault("operation", operation)
        if key_id is not None:
            self.detail.setdefault("key_id", key_id)
        self.operation = operation
        self.key_id = key_id


class SerializationError(InfrastructureError):
    """Failed to serialize a feed or event document."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class EnvelopeFormatError(InfrastructureError):
    """An encrypted response body is not a well-formed ``key::payload`` envelope."""

    default_code = "envelope_format_error"


class ExternalServiceError(InfrastructureError):
    """A remote feed publisher returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code


__all__ = [
    "EnvelopeFormatError",
    "ExternalServiceError",
    "InfrastructureError",
    "KeyServiceError",
    "SerializationError",
    "StoreError",
]
