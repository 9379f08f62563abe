"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError        -> 400
    │   └── NotFoundError          -> 404
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)   -> 500
        ├── StoreError
        ├── KeyServiceError
        ├── SerializationError
        ├── EnvelopeFormatError
        └── ExternalServiceError
"""

from es_atompub.kernel.errors.application import ApplicationError
from es_atompub.kernel.errors.base import BaseError
from es_atompub.kernel.errors.domain import DomainError, NotFoundError, ValidationError
from es_atompub.kernel.errors.infrastructure import (
    EnvelopeFormatError,
    ExternalServiceError,
    InfrastructureError,
    KeyServiceError,
    SerializationError,
    StoreError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "EnvelopeFormatError",
    "ExternalServiceError",
    "InfrastructureError",
    "KeyServiceError",
    "NotFoundError",
    "SerializationError",
    "StoreError",
    "ValidationError",
]
