"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error carries a stable ``code`` and a ``metadata`` dict describing what
went wrong, so callers never have to parse the message text.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.metadata: dict[str, Any] = dict(metadata or {})


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, metadata={"field": field})
        self.field = field


class InactiveProductError(DomainException):
    """A mutating operation was attempted on a deactivated product."""

    code = "INACTIVE_PRODUCT"

    def __init__(self, product_id: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} for inactive product '{product_id}'",
            metadata={"product_id": product_id, "action": action},
        )
        self.product_id = product_id
        self.action = action


class InsufficientStockError(DomainException):
    """A stock reduction asked for more units than are available."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(requested {requested}, available {available})",
            metadata={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


# ---------------------------------------------------------------------------
# Repository errors, raised by adapters implementing the repository port
# ---------------------------------------------------------------------------


class RepositoryError(DomainException):
    """Base class for errors signalled through the repository port."""

    code = "REPOSITORY_ERROR"


class EntityNotFoundError(RepositoryError):
    """A requested entity does not exist."""

    code = "ENTITY_NOT_FOUND"

    def __init__(self, entity_name: str, entity_id: str | None = None) -> None:
        if entity_id:
            message = f"{entity_name} with ID '{entity_id}' not found"
        else:
            message = f"{entity_name} not found"
        super().__init__(
            message, metadata={"entity_name": entity_name, "entity_id": entity_id}
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class DuplicateEntityError(RepositoryError):
    """A unique field (e.g. SKU) is already taken by another entity."""

    code = "DUPLICATE_ENTITY"

    def __init__(self, entity_name: str, field: str, value: str) -> None:
        super().__init__(
            f"{entity_name} with {field} '{value}' already exists",
            metadata={"entity_name": entity_name, "field": field, "value": value},
        )
        self.entity_name = entity_name
        self.field = field
        self.value = value


class ConcurrencyConflictError(RepositoryError):
    """The stored entity changed since it was read; the write was refused."""

    code = "CONCURRENCY_CONFLICT"

    def __init__(self, entity_name: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_name} with ID '{entity_id}' was modified concurrently",
            metadata={"entity_name": entity_name, "entity_id": entity_id},
        )
        self.entity_name = entity_name
        self.entity_id = entity_id
