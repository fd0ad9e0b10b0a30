"""End-to-end costing cascade on a real SQLite database."""

import pytest

from batchcost.application.dto.requests import ReceiveStockRequest
from batchcost.application.use_cases import RecalculateCostsUseCase, ReceiveStockUseCase
from batchcost.core.entities import Recipe, RecipeItem
from batchcost.core.services.costing import CostingService
from batchcost.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLiteProductStore,
    SQLiteRecipeStore,
)

pytestmark = pytest.mark.usefixtures("sqlite_db")


@pytest.fixture
def stores(sqlite_db):
    return {
        "material": SQLiteMaterialStore(),
        "recipe": SQLiteRecipeStore(),
        "product": SQLiteProductStore(),
        "inventory": SQLiteInventoryStore(),
    }


@pytest.fixture
def costing(stores):
    return CostingService(stores["material"], stores["recipe"], stores["product"])


@pytest.fixture
async def bakery(sqlite_db, stores, flour, sugar, cake_mix):
    await stores["material"].create_material(flour)
    await stores["material"].create_material(sugar)
    await stores["recipe"].create_recipe(
        Recipe(
            id="RCP-CAKE",
            name="Sponge",
            items=[
                RecipeItem(raw_material_id="MAT-FLOUR", quantity=2),
                RecipeItem(raw_material_id="MAT-SUGAR", quantity=3),
            ],
        )
    )
    await stores["product"].create_product(cake_mix)


@pytest.fixture
def receive(stores, costing):
    use_case = ReceiveStockUseCase(stores["material"], stores["inventory"], costing)

    async def _receive(material_id, quantity, unit_price, accepted=True):
        return await use_case.execute(
            ReceiveStockRequest(
                material_id=material_id,
                quantity=quantity,
                unit_price=unit_price,
                is_accepted=accepted,
                supplier="Mill & Co",
            )
        )

    return _receive


@pytest.mark.usefixtures("bakery")
class TestCostingFlow:
    async def test_receipts_cascade_to_product(self, receive, stores):
        await receive("MAT-FLOUR", 10, 1.5)
        await receive("MAT-SUGAR", 10, 2.0)

        recipe = await stores["recipe"].get_recipe("RCP-CAKE")
        assert recipe.total_price == pytest.approx(9.0)
        assert [i.total_cost for i in recipe.items] == pytest.approx([3.0, 6.0])

        product = await stores["product"].get_product("PRD-CAKE")
        assert product.recipe_cost == pytest.approx(9.0)
        assert product.profit_per_item == 3.0
        assert product.markup == 33.33
        assert product.profit_margin == 25.0

    async def test_weighted_average_over_receipts(self, receive, costing):
        await receive("MAT-FLOUR", 10, 2.0)
        await receive("MAT-FLOUR", 30, 4.0)
        await receive("MAT-FLOUR", 100, 50.0, accepted=False)

        assert await costing.compute_average_cost("MAT-FLOUR") == pytest.approx(3.5)

    async def test_receipts_update_stock(self, receive, stores):
        first = await receive("MAT-FLOUR", 10, 1.5)
        second = await receive("MAT-FLOUR", 5, 1.5)
        await receive("MAT-FLOUR", 99, 1.5, accepted=False)

        assert first.created is True
        assert second.created is False
        record = await stores["inventory"].find_by_name("Flour", is_final_product=False)
        assert record.stock_level == 15
        assert record.reorder_point == 10
        assert (await stores["material"].get_material("MAT-FLOUR")).current_stock == 15
        movements = await stores["inventory"].get_movements(record.id)
        assert sorted(m.quantity for m in movements) == [5, 10]

    async def test_full_recalculation_is_idempotent(self, receive, stores, costing):
        await receive("MAT-FLOUR", 10, 1.5)
        await receive("MAT-SUGAR", 10, 2.0)
        use_case = RecalculateCostsUseCase(costing, stores["material"], stores["recipe"])

        first = await use_case.for_all()
        before = await stores["product"].get_product("PRD-CAKE")
        second = await use_case.for_all()
        after = await stores["product"].get_product("PRD-CAKE")

        assert first == second
        assert first.recipes_updated == ["RCP-CAKE"]
        assert before.model_dump(exclude={"updated_at"}) == after.model_dump(
            exclude={"updated_at"}
        )

    async def test_recipe_recalculation_without_receipts(self, stores, costing):
        use_case = RecalculateCostsUseCase(costing, stores["material"], stores["recipe"])

        result = await use_case.for_recipe("RCP-CAKE")

        assert result.recomputed is True
        assert result.total_price == 0.0
        product = await stores["product"].get_product("PRD-CAKE")
        assert product.recipe_cost == 0.0
        assert product.markup == 0.0
        assert product.profit_margin == 100.0
