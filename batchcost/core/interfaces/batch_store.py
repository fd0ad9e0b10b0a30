"""Abstract interface for batch manufacturing record storage."""

from abc import ABC, abstractmethod

from batchcost.core.entities.batch import BatchIngredient, BatchManufacturingRecord


class IBatchStore(ABC):
    """
    Interface for batch record persistence.

    Implementations publish an insert or update change for every committed
    write so the inventory reactor can observe batch lifecycles.
    """

    @abstractmethod
    async def create_batch(
        self, batch: BatchManufacturingRecord
    ) -> BatchManufacturingRecord:
        """Create a batch and its ingredients, then publish an insert change."""

    @abstractmethod
    async def get_batch(self, batch_id: str) -> BatchManufacturingRecord | None:
        """Get batch by ID, ingredients included."""

    @abstractmethod
    async def list_ingredients(self, batch_id: str) -> list[BatchIngredient]:
        """List ingredients consumed by a batch."""

    @abstractmethod
    async def update_batch(
        self, batch: BatchManufacturingRecord
    ) -> BatchManufacturingRecord:
        """Update batch header fields, then publish an update change."""
