"""Tests for the SQLite material, recipe and product stores."""

from datetime import UTC, datetime, timedelta

import pytest

from batchcost.core.entities import (
    FinalProduct,
    RawMaterial,
    Recipe,
    RecipeItem,
    StockReceipt,
    UnitConversion,
)
from batchcost.infrastructure.storage.sqlite import (
    SQLiteMaterialStore,
    SQLiteProductStore,
    SQLiteRecipeStore,
)

pytestmark = pytest.mark.usefixtures("sqlite_db")


@pytest.fixture
def material_store():
    return SQLiteMaterialStore()


@pytest.fixture
def recipe_store():
    return SQLiteRecipeStore()


@pytest.fixture
def product_store():
    return SQLiteProductStore()


class TestMaterialStore:
    async def test_create_and_get(self, material_store, flour):
        await material_store.create_material(flour)

        loaded = await material_store.get_material("MAT-FLOUR")
        assert loaded is not None
        assert loaded.name == "Flour"
        assert loaded.minimum_stock == 10.0
        assert loaded.created_at.tzinfo is not None

    async def test_generates_id(self, material_store):
        material = await material_store.create_material(RawMaterial(name="Salt"))
        assert material.id
        assert await material_store.get_material(material.id) is not None

    async def test_get_missing(self, material_store):
        assert await material_store.get_material("NOPE") is None

    async def test_list_materials_by_name(self, material_store, flour, sugar):
        await material_store.create_material(sugar)
        await material_store.create_material(flour)

        materials = await material_store.list_materials()
        assert [m.name for m in materials] == ["Flour", "Sugar"]
        assert len(await material_store.list_materials(limit=1, offset=1)) == 1

    async def test_update_current_stock(self, material_store, flour):
        await material_store.create_material(flour)
        await material_store.update_current_stock("MAT-FLOUR", 42.5)
        assert (await material_store.get_material("MAT-FLOUR")).current_stock == 42.5

    async def test_only_accepted_receipts_listed(self, material_store, flour):
        await material_store.create_material(flour)
        start = datetime(2024, 5, 1, tzinfo=UTC)
        for offset, (qty, price, accepted) in enumerate(
            [(10, 2.0, True), (99, 100.0, False), (30, 4.0, True)]
        ):
            receipt = await material_store.add_receipt(
                StockReceipt(
                    raw_material_id="MAT-FLOUR",
                    quantity=qty,
                    unit_price=price,
                    is_accepted=accepted,
                    received_at=start + timedelta(days=offset),
                )
            )
            assert receipt.id is not None

        receipts = await material_store.list_accepted_receipts("MAT-FLOUR")
        assert [(r.quantity, r.unit_price) for r in receipts] == [(10, 2.0), (30, 4.0)]
        assert all(r.is_accepted for r in receipts)


@pytest.fixture
async def sponge(sqlite_db, material_store, recipe_store, flour, sugar):
    await material_store.create_material(flour)
    await material_store.create_material(sugar)
    return await recipe_store.create_recipe(
        Recipe(
            id="RCP-CAKE",
            name="Sponge",
            items=[
                RecipeItem(raw_material_id="MAT-FLOUR", quantity=2),
                RecipeItem(raw_material_id="MAT-SUGAR", quantity=3),
            ],
        )
    )


class TestRecipeStore:
    async def test_create_assigns_item_ids(self, sponge):
        assert all(item.id is not None for item in sponge.items)
        assert all(item.recipe_id == "RCP-CAKE" for item in sponge.items)

    async def test_get_recipe_with_items(self, recipe_store, sponge):
        loaded = await recipe_store.get_recipe("RCP-CAKE")
        assert loaded.name == "Sponge"
        assert [i.raw_material_id for i in loaded.items] == ["MAT-FLOUR", "MAT-SUGAR"]

    async def test_get_missing(self, recipe_store):
        assert await recipe_store.get_recipe("NOPE") is None

    async def test_recipe_ids_for_material(self, recipe_store, sponge):
        await recipe_store.create_recipe(
            Recipe(
                id="RCP-BREAD",
                name="Bread",
                items=[
                    RecipeItem(raw_material_id="MAT-FLOUR", quantity=5),
                    RecipeItem(raw_material_id="MAT-FLOUR", quantity=1),
                ],
            )
        )

        ids = await recipe_store.list_recipe_ids_for_material("MAT-FLOUR")
        assert sorted(ids) == ["RCP-BREAD", "RCP-CAKE"]
        assert await recipe_store.list_recipe_ids_for_material("MAT-SUGAR") == ["RCP-CAKE"]
        assert await recipe_store.list_recipe_ids() == ["RCP-BREAD", "RCP-CAKE"]

    async def test_update_costs(self, recipe_store, sponge):
        first = sponge.items[0]
        await recipe_store.update_item_costs(first.id, unit_cost=1.5, total_cost=3.0)
        await recipe_store.update_total_price("RCP-CAKE", 9.0)

        loaded = await recipe_store.get_recipe("RCP-CAKE")
        assert loaded.total_price == 9.0
        assert loaded.items[0].unit_cost == 1.5
        assert loaded.items[0].total_cost == 3.0
        assert loaded.items[1].total_cost == 0.0

    async def test_empty_recipe_has_no_items(self, recipe_store):
        await recipe_store.create_recipe(Recipe(id="RCP-EMPTY", name="Empty"))
        assert await recipe_store.list_items("RCP-EMPTY") == []


class TestProductStore:
    async def test_create_and_list_for_recipe(self, product_store, sponge, cake_mix):
        await product_store.create_product(cake_mix)
        await product_store.create_product(FinalProduct(name="Loose Item"))

        products = await product_store.list_products_for_recipe("RCP-CAKE")
        assert [p.id for p in products] == ["PRD-CAKE"]

    async def test_update_costing_writes_derived_fields(self, product_store, sponge, cake_mix):
        await product_store.create_product(cake_mix)
        cake_mix.recipe_cost = 9.0
        cake_mix.profit_per_item = 3.0
        cake_mix.markup = 33.33
        cake_mix.profit_margin = 25.0
        cake_mix.unit_price = 999.0  # not persisted by update_costing

        await product_store.update_costing(cake_mix)

        loaded = await product_store.get_product("PRD-CAKE")
        assert loaded.recipe_cost == 9.0
        assert loaded.markup == 33.33
        assert loaded.profit_margin == 25.0
        assert loaded.profit_per_item == 3.0
        assert loaded.unit_price == 12.0

    async def test_unit_conversion_upsert(self, product_store, sponge, cake_mix):
        await product_store.create_product(cake_mix)
        assert await product_store.get_unit_conversion("PRD-CAKE") is None

        await product_store.upsert_unit_conversion(
            UnitConversion(product_id="PRD-CAKE", kg_per_bag=25.0)
        )
        await product_store.upsert_unit_conversion(
            UnitConversion(product_id="PRD-CAKE", kg_per_bag=30.0)
        )

        conversion = await product_store.get_unit_conversion("PRD-CAKE")
        assert conversion.kg_per_bag == 30.0
