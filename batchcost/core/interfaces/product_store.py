"""Abstract interface for final product storage."""

from abc import ABC, abstractmethod

from batchcost.core.entities.product import FinalProduct, UnitConversion


class IProductStore(ABC):
    """Interface for final product and unit conversion persistence."""

    @abstractmethod
    async def create_product(self, product: FinalProduct) -> FinalProduct:
        """Create a final product."""

    @abstractmethod
    async def get_product(self, product_id: str) -> FinalProduct | None:
        """Get final product by ID."""

    @abstractmethod
    async def list_products_for_recipe(self, recipe_id: str) -> list[FinalProduct]:
        """List final products made from the recipe."""

    @abstractmethod
    async def update_costing(self, product: FinalProduct) -> FinalProduct:
        """Persist recipe_cost, markup, profit_margin and profit_per_item."""

    @abstractmethod
    async def upsert_unit_conversion(self, conversion: UnitConversion) -> UnitConversion:
        """Insert or replace the kg-per-bag conversion of a product."""

    @abstractmethod
    async def get_unit_conversion(self, product_id: str) -> UnitConversion | None:
        """Get the kg-per-bag conversion of a product."""
