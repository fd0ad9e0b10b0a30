"""Final product domain entities."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class FinalProduct(BaseModel):
    """
    A sellable product, optionally made from a recipe.

    recipe_cost, markup, profit_margin and profit_per_item are derived from
    the linked recipe's total_price and unit_price on propagation.
    """

    id: str | None = None
    name: str
    category: str | None = None
    recipe_id: str | None = None
    unit_price: float = 0.0  # selling price
    recipe_cost: float = 0.0
    markup: float = 0.0  # percent of cost
    profit_margin: float = 0.0  # percent of selling price
    profit_per_item: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class UnitConversion(BaseModel):
    """Kilograms of product per bag, derived from a finished batch."""

    product_id: str
    kg_per_bag: float
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
