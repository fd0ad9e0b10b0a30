"""Unit tests for CostingService with mocked stores."""

from unittest.mock import AsyncMock

import pytest

from batchcost.core.entities import FinalProduct, Recipe, RecipeItem
from batchcost.core.exceptions import RecipeNotFoundError, RetrievalError
from batchcost.core.services.costing import (
    CostingService,
    price_product,
    weighted_average_cost,
)


@pytest.fixture
def material_store():
    store = AsyncMock()
    store.list_accepted_receipts.return_value = []
    return store


@pytest.fixture
def recipe_store():
    store = AsyncMock()
    store.list_items.return_value = []
    store.list_recipe_ids.return_value = []
    store.list_recipe_ids_for_material.return_value = []
    return store


@pytest.fixture
def product_store():
    store = AsyncMock()
    store.list_products_for_recipe.return_value = []
    return store


@pytest.fixture
def service(material_store, recipe_store, product_store):
    return CostingService(
        material_store=material_store,
        recipe_store=recipe_store,
        product_store=product_store,
    )


class TestWeightedAverage:
    def test_two_receipts(self, make_receipt):
        receipts = [make_receipt("M", 10, 2.0), make_receipt("M", 30, 4.0)]
        assert weighted_average_cost(receipts) == pytest.approx(3.5)

    def test_single_receipt_is_its_price(self, make_receipt):
        assert weighted_average_cost([make_receipt("M", 7, 1.25)]) == pytest.approx(1.25)

    def test_empty(self):
        assert weighted_average_cost([]) == 0.0


class TestComputeAverageCost:
    async def test_no_receipts_gives_zero(self, service, material_store):
        assert await service.compute_average_cost("MAT-1") == 0.0
        material_store.list_accepted_receipts.assert_awaited_once_with("MAT-1")

    async def test_uses_accepted_receipts(self, service, material_store, make_receipt):
        material_store.list_accepted_receipts.return_value = [
            make_receipt("MAT-1", 10, 2.0),
            make_receipt("MAT-1", 30, 4.0),
        ]
        assert await service.compute_average_cost("MAT-1") == pytest.approx(3.5)

    async def test_read_failure_propagates(self, service, material_store):
        material_store.list_accepted_receipts.side_effect = RetrievalError(
            "list_accepted_receipts", "disk I/O error"
        )
        with pytest.raises(RetrievalError):
            await service.compute_average_cost("MAT-1")


class TestRecomputeRecipeCost:
    async def test_sums_item_costs(self, service, material_store, recipe_store, make_receipt):
        """2 x 1.50 + 3 x 2.00 = 9.00."""
        recipe_store.list_items.return_value = [
            RecipeItem(id=1, recipe_id="R", raw_material_id="A", quantity=2),
            RecipeItem(id=2, recipe_id="R", raw_material_id="B", quantity=3),
        ]
        prices = {"A": [make_receipt("A", 10, 1.5)], "B": [make_receipt("B", 10, 2.0)]}
        material_store.list_accepted_receipts.side_effect = lambda mid: prices[mid]

        assert await service.recompute_recipe_cost("R") is True

        recipe_store.update_item_costs.assert_any_await(1, unit_cost=1.5, total_cost=3.0)
        recipe_store.update_item_costs.assert_any_await(2, unit_cost=2.0, total_cost=6.0)
        recipe_store.update_total_price.assert_awaited_once_with("R", 9.0)

    async def test_item_without_receipts_costs_zero(self, service, recipe_store):
        recipe_store.list_items.return_value = [
            RecipeItem(id=5, recipe_id="R", raw_material_id="A", quantity=4),
        ]
        await service.recompute_recipe_cost("R")
        recipe_store.update_item_costs.assert_awaited_once_with(5, unit_cost=0.0, total_cost=0.0)
        recipe_store.update_total_price.assert_awaited_once_with("R", 0.0)

    async def test_empty_recipe_writes_nothing(self, service, recipe_store):
        assert await service.recompute_recipe_cost("R") is False
        recipe_store.update_item_costs.assert_not_awaited()
        recipe_store.update_total_price.assert_not_awaited()


class TestPriceProduct:
    def test_profit_markup_margin(self):
        pricing = price_product(9.0, 12.0)
        assert pricing.recipe_cost == 9.0
        assert pricing.profit_per_item == 3.0
        assert pricing.markup == 33.33
        assert pricing.profit_margin == 25.0

    def test_zero_cost_gives_zero_markup(self):
        pricing = price_product(0.0, 12.0)
        assert pricing.markup == 0.0
        assert pricing.profit_margin == 100.0

    def test_zero_selling_price_gives_zero_margin(self):
        pricing = price_product(4.0, 0.0)
        assert pricing.profit_margin == 0.0
        assert pricing.profit_per_item == -4.0
        assert pricing.markup == -100.0

    def test_decimals(self):
        assert price_product(9.0, 12.0, decimals=4).markup == 33.3333


class TestPropagate:
    async def test_updates_linked_products(self, service, recipe_store, product_store):
        recipe_store.get_recipe.return_value = Recipe(id="R", name="Sponge", total_price=9.0)
        product = FinalProduct(id="P", name="Sponge Cake", recipe_id="R", unit_price=12.0)
        product_store.list_products_for_recipe.return_value = [product]

        assert await service.propagate_to_final_products("R") == 1

        product_store.update_costing.assert_awaited_once_with(product)
        assert product.recipe_cost == 9.0
        assert product.profit_per_item == 3.0
        assert product.markup == 33.33
        assert product.profit_margin == 25.0

    async def test_missing_recipe_raises(self, service, recipe_store):
        recipe_store.get_recipe.return_value = None
        with pytest.raises(RecipeNotFoundError):
            await service.propagate_to_final_products("NOPE")

    async def test_no_products(self, service, recipe_store, product_store):
        recipe_store.get_recipe.return_value = Recipe(id="R", name="Sponge", total_price=9.0)
        assert await service.propagate_to_final_products("R") == 0
        product_store.update_costing.assert_not_awaited()


class TestCascade:
    async def test_update_costs_for_material_dedupes(
        self, service, recipe_store, product_store
    ):
        recipe_store.list_recipe_ids_for_material.return_value = ["R1", "R2", "R1"]
        recipe_store.list_items.side_effect = lambda rid: (
            [RecipeItem(id=1, recipe_id=rid, raw_material_id="A", quantity=1)]
            if rid == "R1"
            else []
        )
        recipe_store.get_recipe.side_effect = lambda rid: Recipe(id=rid, name=rid)

        result = await service.update_costs_for_material("A")

        assert result.recipes_updated == ["R1"]
        assert result.recipes_skipped == ["R2"]
        assert recipe_store.get_recipe.await_count == 2

    async def test_update_all_costs_is_idempotent(
        self, service, material_store, recipe_store, product_store, make_receipt
    ):
        recipe_store.list_recipe_ids.return_value = ["R"]
        recipe_store.list_items.return_value = [
            RecipeItem(id=1, recipe_id="R", raw_material_id="A", quantity=2),
        ]
        material_store.list_accepted_receipts.return_value = [make_receipt("A", 5, 1.5)]
        recipe_store.get_recipe.return_value = Recipe(id="R", name="Sponge", total_price=3.0)
        product_store.list_products_for_recipe.side_effect = lambda rid: [
            FinalProduct(id="P", name="Sponge Cake", recipe_id="R", unit_price=12.0)
        ]

        first = await service.update_all_costs()
        second = await service.update_all_costs()

        assert first == second
        assert first.products_updated == 1
        written = [c.args[0] for c in product_store.update_costing.await_args_list]
        assert written[0].model_dump(exclude={"updated_at", "created_at"}) == written[
            1
        ].model_dump(exclude={"updated_at", "created_at"})
        totals = [c.args for c in recipe_store.update_total_price.await_args_list]
        assert totals == [("R", 3.0), ("R", 3.0)]
