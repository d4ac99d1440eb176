"""Infrastructure errors – blob store I/O and payload encoding."""

from __future__ import annotations

from typing import Any

from flagdesk.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class BlobStoreError(InfrastructureError):
    """Reading or writing the persisted State blob failed."""

    default_code = "blob_store_error"

    def __init__(
        self,
        key: str,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"key": key, "operation": operation})
        super().__init__(message or f"Blob store {operation} failed for key '{key}'", **kwargs)
        self.key = key
        self.operation = operation


class SerializationError(InfrastructureError):
    """Failed to encode the State into its blob form."""

    default_code = "serialization_error"


__all__ = ["BlobStoreError", "InfrastructureError", "SerializationError"]
