"""Tests for the SQLite inventory and batch stores."""

from datetime import date

import pytest

from batchcost.core.entities import (
    BATCH_TABLE,
    BatchIngredient,
    ChangeKind,
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.exceptions import BatchNotFoundError, PersistenceError
from batchcost.infrastructure.events import InMemoryChangeFeed
from batchcost.infrastructure.storage.sqlite import (
    SQLiteBatchStore,
    SQLiteInventoryStore,
    SQLiteMaterialStore,
    SQLiteProductStore,
)

pytestmark = pytest.mark.usefixtures("sqlite_db")


@pytest.fixture
def inventory_store():
    return SQLiteInventoryStore()


def _movement(inventory_id, movement_type, quantity, reference_id="BATCH-1"):
    return InventoryMovement(
        inventory_id=inventory_id,
        movement_type=movement_type,
        quantity=quantity,
        reference_type=ReferenceType.BATCH,
        reference_id=reference_id,
    )


class TestInventoryRecords:
    async def test_create_and_get(self, inventory_store):
        record = await inventory_store.create_record(
            InventoryRecord(product_name="Flour", stock_level=20, reorder_point=10)
        )
        assert record.id is not None

        loaded = await inventory_store.get_record(record.id)
        assert loaded.product_name == "Flour"
        assert loaded.stock_level == 20
        assert loaded.is_final_product is False

    async def test_find_by_name_is_exact_and_first_wins(self, inventory_store):
        first = await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        await inventory_store.create_record(
            InventoryRecord(product_name="Flour", is_final_product=True)
        )

        found = await inventory_store.find_by_name("Flour", is_final_product=False)
        assert found.id == first.id
        assert await inventory_store.find_by_name("flour", is_final_product=False) is None
        final = await inventory_store.find_by_name("Flour", is_final_product=True)
        assert final.is_final_product is True

    async def test_update_stock_level(self, inventory_store):
        record = await inventory_store.create_record(
            InventoryRecord(product_name="Flour", stock_level=20)
        )
        record.apply_delta(-5)
        await inventory_store.update_stock_level(record)
        assert (await inventory_store.get_record(record.id)).stock_level == 15

    async def test_negative_stock_rejected_by_schema(self, inventory_store):
        record = await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        record.stock_level = -1
        with pytest.raises(PersistenceError):
            await inventory_store.update_stock_level(record)

    async def test_list_and_low_stock(self, inventory_store):
        await inventory_store.create_record(
            InventoryRecord(product_name="Sugar", stock_level=3, reorder_point=5)
        )
        await inventory_store.create_record(
            InventoryRecord(product_name="Flour", stock_level=50, reorder_point=10)
        )
        await inventory_store.create_record(
            InventoryRecord(product_name="Cake Mix", is_final_product=True, reorder_point=5)
        )

        names = [r.product_name for r in await inventory_store.list_records()]
        assert names == ["Flour", "Sugar", "Cake Mix"]
        low = {r.product_name for r in await inventory_store.list_low_stock()}
        assert low == {"Sugar", "Cake Mix"}


class TestMovements:
    async def test_add_and_query_by_reference(self, inventory_store):
        record = await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        consume = await inventory_store.add_movement(
            _movement(record.id, MovementType.MANUFACTURING_CONSUME, -5)
        )
        await inventory_store.add_movement(
            _movement(record.id, MovementType.MANUFACTURING_CONSUME, -1, reference_id="OTHER")
        )

        assert consume.id is not None
        movements = await inventory_store.get_movements_by_reference(
            ReferenceType.BATCH, "BATCH-1"
        )
        assert [m.quantity for m in movements] == [-5]
        assert movements[0].movement_type == MovementType.MANUFACTURING_CONSUME

    async def test_has_movement(self, inventory_store):
        record = await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        await inventory_store.add_movement(
            _movement(record.id, MovementType.MANUFACTURING_CONSUME, -5)
        )

        assert await inventory_store.has_movement(
            ReferenceType.BATCH, "BATCH-1", MovementType.MANUFACTURING_CONSUME
        )
        assert not await inventory_store.has_movement(
            ReferenceType.BATCH, "BATCH-1", MovementType.MANUFACTURING_PRODUCE
        )
        assert not await inventory_store.has_movement(
            ReferenceType.BATCH, "BATCH-2", MovementType.MANUFACTURING_CONSUME
        )

    async def test_get_movements_newest_first(self, inventory_store):
        record = await inventory_store.create_record(InventoryRecord(product_name="Flour"))
        for quantity in (1, 2, 3):
            await inventory_store.add_movement(
                InventoryMovement(
                    inventory_id=record.id,
                    movement_type=MovementType.MANUAL_ADJUSTMENT,
                    quantity=quantity,
                )
            )

        movements = await inventory_store.get_movements(record.id, limit=2)
        assert [m.quantity for m in movements] == [3, 2]
        assert movements[0].reference_type is None


@pytest.fixture
async def seeded(sqlite_db, flour, cake_mix):
    await SQLiteMaterialStore().create_material(flour)
    cake_mix.recipe_id = None
    await SQLiteProductStore().create_product(cake_mix)


@pytest.fixture
def feed():
    return InMemoryChangeFeed()


@pytest.fixture
def batch_store(feed):
    return SQLiteBatchStore(change_feed=feed)


@pytest.mark.usefixtures("seeded")
class TestBatchStore:
    async def test_create_publishes_insert(self, batch_store, feed, make_batch):
        sub = feed.subscribe(BATCH_TABLE)
        batch = make_batch(
            batch_id="",
            bags_count=4,
            ingredients=[
                BatchIngredient(
                    raw_material_id="MAT-FLOUR",
                    quantity=60,
                    batch_number="LOT-7",
                    best_before_date=date(2025, 1, 31),
                )
            ],
        )

        created = await batch_store.create_batch(batch)

        assert created.id
        assert created.ingredients[0].id is not None
        sub.close()
        events = [e async for e in sub]
        assert len(events) == 1
        assert events[0].kind == ChangeKind.INSERT
        assert events[0].new.id == created.id
        assert events[0].old is None

    async def test_round_trip(self, batch_store, make_batch):
        created = await batch_store.create_batch(
            make_batch(
                batch_size=100.0,
                bags_count=4,
                ingredients=[
                    BatchIngredient(
                        raw_material_id="MAT-FLOUR",
                        quantity=60,
                        best_before_date=date(2025, 1, 31),
                    )
                ],
            )
        )

        loaded = await batch_store.get_batch(created.id)
        assert loaded.bags_count == 4
        assert loaded.batch_size == 100.0
        assert loaded.batch_started == created.batch_started
        assert loaded.batch_finished is None
        assert loaded.ingredients[0].best_before_date == date(2025, 1, 31)
        assert await batch_store.list_ingredients(created.id) == loaded.ingredients

    async def test_update_publishes_old_and_new(self, batch_store, feed, make_batch):
        created = await batch_store.create_batch(make_batch(bags_count=4))
        sub = feed.subscribe(BATCH_TABLE, kinds=[ChangeKind.UPDATE])

        finished = make_batch(finished=True, bags_count=5)
        await batch_store.update_batch(finished)

        sub.close()
        events = [e async for e in sub]
        assert len(events) == 1
        assert events[0].old.bags_count == 4
        assert events[0].old.is_finished is False
        assert events[0].new.bags_count == 5
        assert events[0].new.is_finished is True
        assert (await batch_store.get_batch(created.id)).is_finished

    async def test_update_missing_batch(self, batch_store, make_batch):
        with pytest.raises(BatchNotFoundError):
            await batch_store.update_batch(make_batch(batch_id="NOPE"))

    async def test_get_missing(self, batch_store):
        assert await batch_store.get_batch("NOPE") is None
