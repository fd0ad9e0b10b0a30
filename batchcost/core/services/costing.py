"""
Costing engine.

Derives raw-material unit cost from accepted receipts (quantity-weighted
average), rolls it up into recipe cost and pushes that cost into every
final product built from the recipe.

Writes are issued one row at a time with no surrounding transaction: a
failure part-way leaves earlier rows updated. Every operation overwrites
its targets completely, so rerunning after a failure is safe.
"""

from dataclasses import dataclass, field

from batchcost.config import get_logger
from batchcost.core.entities.material import StockReceipt
from batchcost.core.entities.product import FinalProduct
from batchcost.core.exceptions import RecipeNotFoundError
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.core.interfaces.product_store import IProductStore
from batchcost.core.interfaces.recipe_store import IRecipeStore

logger = get_logger(__name__)


def weighted_average_cost(receipts: list[StockReceipt]) -> float:
    """
    Quantity-weighted average unit price over receipts.

    Returns 0 when there is nothing to average.
    """
    total_cost = 0.0
    total_quantity = 0.0
    for receipt in receipts:
        total_cost += receipt.quantity * receipt.unit_price
        total_quantity += receipt.quantity
    if total_quantity <= 0:
        return 0.0
    return total_cost / total_quantity


@dataclass
class ProductPricing:
    """Derived financial fields of a final product."""

    recipe_cost: float
    profit_per_item: float
    markup: float
    profit_margin: float


def price_product(recipe_cost: float, selling_price: float, decimals: int = 2) -> ProductPricing:
    """
    Compute profit, markup and margin for a product.

    markup is profit as a percentage of cost, margin is profit as a
    percentage of selling price. A zero divisor yields exactly 0.
    """
    profit = selling_price - recipe_cost
    markup = (profit / recipe_cost) * 100 if recipe_cost > 0 else 0.0
    margin = (profit / selling_price) * 100 if selling_price > 0 else 0.0
    return ProductPricing(
        recipe_cost=recipe_cost,
        profit_per_item=round(profit, decimals),
        markup=round(markup, decimals),
        profit_margin=round(margin, decimals),
    )


@dataclass
class CostUpdateResult:
    """Outcome of a multi-recipe cost update."""

    recipes_updated: list[str] = field(default_factory=list)
    recipes_skipped: list[str] = field(default_factory=list)  # no items
    products_updated: int = 0


class CostingService:
    """
    Weighted-average costing with cascade to recipes and final products.

    Store errors (RetrievalError / PersistenceError) propagate to the
    caller unchanged; nothing is substituted or rolled back.
    """

    def __init__(
        self,
        material_store: IMaterialStore,
        recipe_store: IRecipeStore,
        product_store: IProductStore,
        price_decimals: int = 2,
    ):
        self._material_store = material_store
        self._recipe_store = recipe_store
        self._product_store = product_store
        self._price_decimals = price_decimals

    async def compute_average_cost(self, material_id: str) -> float:
        """
        Weighted-average unit cost of a raw material.

        0 means no accepted receipts exist. A failed read raises instead.
        """
        receipts = await self._material_store.list_accepted_receipts(material_id)
        if not receipts:
            logger.debug("no_accepted_receipts", material_id=material_id)
            return 0.0
        return weighted_average_cost(receipts)

    async def recompute_recipe_cost(self, recipe_id: str) -> bool:
        """
        Refresh item costs and the cached total price of a recipe.

        Returns False when the recipe has no items (nothing written).
        """
        items = await self._recipe_store.list_items(recipe_id)
        if not items:
            logger.info("recipe_has_no_items", recipe_id=recipe_id)
            return False

        total_price = 0.0
        for item in items:
            avg_cost = await self.compute_average_cost(item.raw_material_id)
            item_total = avg_cost * item.quantity
            await self._recipe_store.update_item_costs(
                item.id,  # type: ignore[arg-type]
                unit_cost=avg_cost,
                total_cost=item_total,
            )
            total_price += item_total

        await self._recipe_store.update_total_price(recipe_id, total_price)

        logger.info(
            "recipe_cost_recomputed",
            recipe_id=recipe_id,
            items=len(items),
            total_price=round(total_price, 4),
        )
        return True

    async def propagate_to_final_products(self, recipe_id: str) -> int:
        """
        Copy the recipe's stored total price into its final products.

        Trusts whatever total_price is stored; call recompute_recipe_cost
        first when freshness matters. Returns the number of products updated.
        """
        recipe = await self._recipe_store.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        recipe_cost = recipe.total_price or 0.0

        products = await self._product_store.list_products_for_recipe(recipe_id)
        if not products:
            logger.info("recipe_has_no_products", recipe_id=recipe_id)
            return 0

        for product in products:
            self._apply_pricing(product, recipe_cost)
            await self._product_store.update_costing(product)

        logger.info(
            "final_products_repriced",
            recipe_id=recipe_id,
            products=len(products),
            recipe_cost=round(recipe_cost, 4),
        )
        return len(products)

    async def update_recipe(self, recipe_id: str) -> tuple[bool, int]:
        """Recompute one recipe, then propagate it to its products."""
        recomputed = await self.recompute_recipe_cost(recipe_id)
        products = await self.propagate_to_final_products(recipe_id)
        return recomputed, products

    async def update_costs_for_material(self, material_id: str) -> CostUpdateResult:
        """Refresh every recipe that uses a material, typically after a receipt."""
        recipe_ids = await self._recipe_store.list_recipe_ids_for_material(material_id)
        logger.info(
            "material_cost_update_started",
            material_id=material_id,
            recipes=len(recipe_ids),
        )
        return await self._update_recipes(recipe_ids)

    async def update_all_costs(self) -> CostUpdateResult:
        """Full resync of every recipe and final product."""
        recipe_ids = await self._recipe_store.list_recipe_ids()
        logger.info("full_cost_update_started", recipes=len(recipe_ids))
        return await self._update_recipes(recipe_ids)

    async def _update_recipes(self, recipe_ids: list[str]) -> CostUpdateResult:
        result = CostUpdateResult()
        # dict.fromkeys keeps first-seen order while deduplicating
        for recipe_id in dict.fromkeys(recipe_ids):
            recomputed, products = await self.update_recipe(recipe_id)
            if recomputed:
                result.recipes_updated.append(recipe_id)
            else:
                result.recipes_skipped.append(recipe_id)
            result.products_updated += products

        logger.info(
            "cost_update_complete",
            recipes_updated=len(result.recipes_updated),
            recipes_skipped=len(result.recipes_skipped),
            products_updated=result.products_updated,
        )
        return result

    def _apply_pricing(self, product: FinalProduct, recipe_cost: float) -> None:
        pricing = price_product(
            recipe_cost, product.unit_price or 0.0, self._price_decimals
        )
        product.recipe_cost = pricing.recipe_cost
        product.profit_per_item = pricing.profit_per_item
        product.markup = pricing.markup
        product.profit_margin = pricing.profit_margin
