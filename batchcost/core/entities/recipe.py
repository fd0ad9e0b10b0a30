"""Recipe (bill of materials) domain entities."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class RecipeItem(BaseModel):
    """
    One raw material line in a recipe.

    unit_cost and total_cost are caches, stale until the recipe is recomputed.
    """

    id: int | None = None
    recipe_id: str | None = None
    raw_material_id: str
    quantity: float = Field(..., ge=0)
    unit_cost: float = 0.0
    total_cost: float = 0.0


class Recipe(BaseModel):
    """
    A bill of materials for a final product.

    total_price equals the sum of item total_costs only right after a
    recompute; nothing else keeps it current.
    """

    id: str | None = None
    name: str
    description: str | None = None
    total_price: float = 0.0
    items: list[RecipeItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def items_total(self) -> float:
        """Sum of the cached item total costs."""
        return sum(item.total_cost for item in self.items)
