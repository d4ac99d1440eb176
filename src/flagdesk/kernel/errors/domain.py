"""Domain errors – rejected command input."""

from __future__ import annotations

from typing import Any

from flagdesk.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Command input does not meet validation rules.

    ``errors`` is a list of field-level failures, each a dict with
    ``field`` and ``message`` keys.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    @property
    def fields(self) -> list[str]:
        return [str(e.get("field")) for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class UnknownEnvironmentError(ValidationError):
    """An environment name outside the fixed set was supplied."""

    default_code = "unknown_environment"

    def __init__(self, name: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Unknown environment {name!r}",
            errors=[{"field": "env", "message": f"unknown environment {name!r}"}],
            **kwargs,
        )
        self.name = name


__all__ = [
    "DomainError",
    "UnknownEnvironmentError",
    "ValidationError",
]
