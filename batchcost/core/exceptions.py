"""
Domain exceptions for the BatchCost application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class BatchCostError(Exception):
    """Base exception for all BatchCost errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(BatchCostError):
    """Base exception for storage operations."""

    pass


class RetrievalError(StorageError):
    """A read from the store failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Retrieval failed during {operation}: {error}",
            code="RETRIEVAL_ERROR",
            details={"operation": operation, "error": error},
        )


class PersistenceError(StorageError):
    """A write to the store failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Persistence failed during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "error": error},
        )


# Not-found conditions
class NotFoundError(BatchCostError):
    """Base exception for missing entities."""

    pass


class RawMaterialNotFoundError(NotFoundError):
    """Raw material not found."""

    def __init__(self, material_id: str):
        super().__init__(
            f"Raw material not found: {material_id}",
            code="RAW_MATERIAL_NOT_FOUND",
            details={"material_id": material_id},
        )


class RecipeNotFoundError(NotFoundError):
    """Recipe not found."""

    def __init__(self, recipe_id: str):
        super().__init__(
            f"Recipe not found: {recipe_id}",
            code="RECIPE_NOT_FOUND",
            details={"recipe_id": recipe_id},
        )


class FinalProductNotFoundError(NotFoundError):
    """Final product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Final product not found: {product_id}",
            code="FINAL_PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class BatchNotFoundError(NotFoundError):
    """Batch manufacturing record not found."""

    def __init__(self, batch_id: str):
        super().__init__(
            f"Batch record not found: {batch_id}",
            code="BATCH_NOT_FOUND",
            details={"batch_id": batch_id},
        )


class InventoryRecordNotFoundError(NotFoundError):
    """No inventory record for the given id or name."""

    def __init__(self, key: int | str):
        super().__init__(
            f"Inventory record not found: {key}",
            code="INVENTORY_RECORD_NOT_FOUND",
            details={"key": key},
        )


# Inventory Exceptions
class InsufficientStockError(BatchCostError):
    """Requested quantity exceeds stock on hand."""

    def __init__(self, inventory_id: int | None, requested: float, available: float):
        super().__init__(
            f"Not enough stock available: requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "inventory_id": inventory_id,
                "requested": requested,
                "available": available,
            },
        )


# Validation Exceptions
class ValidationError(BatchCostError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(BatchCostError):
    """Configuration error."""

    pass
