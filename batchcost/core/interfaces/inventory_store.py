"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)


class IInventoryStore(ABC):
    """Interface for inventory record and movement persistence."""

    @abstractmethod
    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create a new inventory record."""
        pass

    @abstractmethod
    async def get_record(self, record_id: int) -> InventoryRecord | None:
        """Get inventory record by ID."""
        pass

    @abstractmethod
    async def find_by_name(
        self, product_name: str, is_final_product: bool
    ) -> InventoryRecord | None:
        """Get inventory record by exact (case-sensitive) product name."""
        pass

    @abstractmethod
    async def update_stock_level(self, record: InventoryRecord) -> InventoryRecord:
        """Persist the record's stock_level and touch last_updated."""
        pass

    @abstractmethod
    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        """List inventory records with pagination."""
        pass

    @abstractmethod
    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        """List records where stock_level is at or below reorder_point."""
        pass

    @abstractmethod
    async def add_movement(self, movement: InventoryMovement) -> InventoryMovement:
        """Append a movement to the audit trail."""
        pass

    @abstractmethod
    async def get_movements(
        self, inventory_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryMovement]:
        """Get movements for an inventory record, newest first."""
        pass

    @abstractmethod
    async def get_movements_by_reference(
        self, reference_type: ReferenceType, reference_id: str
    ) -> list[InventoryMovement]:
        """Get every movement caused by one entity, oldest first."""
        pass

    @abstractmethod
    async def has_movement(
        self,
        reference_type: ReferenceType,
        reference_id: str,
        movement_type: MovementType,
    ) -> bool:
        """Check whether a movement with this reference and type was already recorded."""
        pass
