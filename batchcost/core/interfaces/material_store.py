"""
Abstract interface for raw material storage.

Covers raw materials and the stock receipts their average cost is
derived from.
"""

from abc import ABC, abstractmethod

from batchcost.core.entities.material import RawMaterial, StockReceipt


class IMaterialStore(ABC):
    """Interface for raw material and stock receipt persistence."""

    @abstractmethod
    async def create_material(self, material: RawMaterial) -> RawMaterial:
        """Create a new raw material."""

    @abstractmethod
    async def get_material(self, material_id: str) -> RawMaterial | None:
        """Get raw material by ID."""

    @abstractmethod
    async def list_materials(
        self, limit: int = 100, offset: int = 0
    ) -> list[RawMaterial]:
        """List raw materials ordered by name."""

    @abstractmethod
    async def update_current_stock(self, material_id: str, current_stock: float) -> None:
        """Overwrite the material's current stock level."""

    @abstractmethod
    async def add_receipt(self, receipt: StockReceipt) -> StockReceipt:
        """Record a stock receipt."""

    @abstractmethod
    async def list_accepted_receipts(self, material_id: str) -> list[StockReceipt]:
        """List receipts for a material where is_accepted is true."""
