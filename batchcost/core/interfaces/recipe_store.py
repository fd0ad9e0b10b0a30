"""Abstract interface for recipe storage."""

from abc import ABC, abstractmethod

from batchcost.core.entities.recipe import Recipe, RecipeItem


class IRecipeStore(ABC):
    """Interface for recipe and recipe item persistence."""

    @abstractmethod
    async def create_recipe(self, recipe: Recipe) -> Recipe:
        """Create a recipe together with its items."""

    @abstractmethod
    async def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Get recipe by ID, items included."""

    @abstractmethod
    async def list_recipe_ids(self) -> list[str]:
        """List the IDs of every recipe."""

    @abstractmethod
    async def list_items(self, recipe_id: str) -> list[RecipeItem]:
        """List the items of a recipe."""

    @abstractmethod
    async def list_recipe_ids_for_material(self, material_id: str) -> list[str]:
        """List distinct IDs of recipes with an item referencing the material."""

    @abstractmethod
    async def update_item_costs(
        self, item_id: int, unit_cost: float, total_cost: float
    ) -> None:
        """Persist the cached costs of one recipe item."""

    @abstractmethod
    async def update_total_price(self, recipe_id: str, total_price: float) -> None:
        """Persist the cached total price of a recipe."""
