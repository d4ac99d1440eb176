"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    │       └── UnknownEnvironmentError
    ├── InfrastructureError      (infrastructure.py)
    │   ├── BlobStoreError
    │   └── SerializationError
    └── ConfigError              (flagdesk.config.errors)
"""

from flagdesk.kernel.errors.base import BaseError
from flagdesk.kernel.errors.domain import (
    DomainError,
    UnknownEnvironmentError,
    ValidationError,
)
from flagdesk.kernel.errors.infrastructure import (
    BlobStoreError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "BaseError",
    "BlobStoreError",
    "DomainError",
    "InfrastructureError",
    "SerializationError",
    "UnknownEnvironmentError",
    "ValidationError",
]
