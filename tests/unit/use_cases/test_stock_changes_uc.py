"""Unit tests for wastage and manual adjustment use cases."""

from unittest.mock import AsyncMock

import pytest

from batchcost.application.dto.requests import AdjustStockRequest, RecordWastageRequest
from batchcost.application.use_cases.adjust_stock import AdjustStockUseCase
from batchcost.application.use_cases.record_wastage import RecordWastageUseCase
from batchcost.core.entities import InventoryRecord, MovementType, ReferenceType
from batchcost.core.exceptions import (
    FinalProductNotFoundError,
    InsufficientStockError,
    InventoryRecordNotFoundError,
    ValidationError,
)


def _stamp(movement):
    movement.id = 8
    return movement


@pytest.fixture
def cake_record():
    return InventoryRecord(
        id=4, product_name="Cake Mix", stock_level=10, unit="bag", is_final_product=True
    )


@pytest.fixture
def inventory_store(cake_record):
    store = AsyncMock()
    store.find_by_name.return_value = cake_record
    store.get_record.return_value = cake_record
    store.update_stock_level.side_effect = lambda record: record
    store.add_movement.side_effect = _stamp
    return store


@pytest.fixture
def product_store(cake_mix):
    store = AsyncMock()
    store.get_product.return_value = cake_mix
    return store


class TestRecordWastage:
    async def test_writes_off_stock(self, product_store, inventory_store, cake_record):
        use_case = RecordWastageUseCase(product_store, inventory_store)

        result = await use_case.execute(
            RecordWastageRequest(product_id="PRD-CAKE", quantity=3, reason="torn bags")
        )

        assert cake_record.stock_level == 7
        inventory_store.find_by_name.assert_awaited_once_with("Cake Mix", is_final_product=True)
        movement = result.movement
        assert movement.movement_type == MovementType.WASTAGE
        assert movement.quantity == -3
        assert movement.reference_type == ReferenceType.WASTAGE
        assert movement.reference_id == "PRD-CAKE"
        assert movement.notes == "torn bags"

    async def test_more_than_on_hand_rejected(self, product_store, inventory_store, cake_record):
        use_case = RecordWastageUseCase(product_store, inventory_store)

        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.execute(RecordWastageRequest(product_id="PRD-CAKE", quantity=11))

        assert exc_info.value.details["available"] == 10
        assert cake_record.stock_level == 10
        inventory_store.update_stock_level.assert_not_awaited()

    async def test_exact_balance_allowed(self, product_store, inventory_store, cake_record):
        use_case = RecordWastageUseCase(product_store, inventory_store)
        await use_case.execute(RecordWastageRequest(product_id="PRD-CAKE", quantity=10))
        assert cake_record.stock_level == 0

    async def test_unknown_product(self, product_store, inventory_store):
        product_store.get_product.return_value = None
        use_case = RecordWastageUseCase(product_store, inventory_store)
        with pytest.raises(FinalProductNotFoundError):
            await use_case.execute(RecordWastageRequest(product_id="NOPE", quantity=1))

    async def test_product_without_stock_record(self, product_store, inventory_store):
        inventory_store.find_by_name.return_value = None
        use_case = RecordWastageUseCase(product_store, inventory_store)
        with pytest.raises(InventoryRecordNotFoundError):
            await use_case.execute(RecordWastageRequest(product_id="PRD-CAKE", quantity=1))


class TestAdjustStock:
    async def test_positive_adjustment(self, inventory_store, cake_record):
        use_case = AdjustStockUseCase(inventory_store)

        result = await use_case.execute(
            AdjustStockRequest(inventory_id=4, delta=2.5, notes="stock take")
        )

        assert cake_record.stock_level == 12.5
        assert result.movement.movement_type == MovementType.MANUAL_ADJUSTMENT
        assert result.movement.quantity == 2.5
        assert result.movement.reference_type == ReferenceType.MANUAL

    async def test_negative_adjustment_floors_at_zero(self, inventory_store, cake_record):
        use_case = AdjustStockUseCase(inventory_store)

        result = await use_case.execute(AdjustStockRequest(inventory_id=4, delta=-25))

        assert cake_record.stock_level == 0
        assert result.movement.quantity == -25

    async def test_zero_delta_rejected(self, inventory_store):
        use_case = AdjustStockUseCase(inventory_store)
        with pytest.raises(ValidationError):
            await use_case.execute(AdjustStockRequest(inventory_id=4, delta=0))
        inventory_store.get_record.assert_not_awaited()

    async def test_unknown_record(self, inventory_store):
        inventory_store.get_record.return_value = None
        use_case = AdjustStockUseCase(inventory_store)
        with pytest.raises(InventoryRecordNotFoundError):
            await use_case.execute(AdjustStockRequest(inventory_id=404, delta=1))

    async def test_to_response(self, inventory_store):
        use_case = AdjustStockUseCase(inventory_store)
        response = use_case.to_response(
            await use_case.execute(AdjustStockRequest(inventory_id=4, delta=1))
        )
        assert response.inventory_record.stock_level == 11
        assert response.movement.movement_type == "manual_adjustment"
