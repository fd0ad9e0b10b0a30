"""Tests for inventory entities."""

from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)


class TestInventoryRecord:
    def test_defaults(self):
        record = InventoryRecord(product_name="Flour")
        assert record.id is None
        assert record.stock_level == 0.0
        assert record.unit == "kg"
        assert record.is_final_product is False
        assert record.is_recipe_based is False

    def test_apply_positive_delta(self):
        record = InventoryRecord(product_name="Flour", stock_level=20.0)
        applied = record.apply_delta(5.0)
        assert record.stock_level == 25.0
        assert applied == 5.0

    def test_apply_negative_delta(self):
        record = InventoryRecord(product_name="Flour", stock_level=20.0)
        applied = record.apply_delta(-5.0)
        assert record.stock_level == 15.0
        assert applied == -5.0

    def test_stock_never_goes_below_zero(self):
        """Consuming more than is on hand floors the level at zero."""
        record = InventoryRecord(product_name="Flour", stock_level=3.0)
        applied = record.apply_delta(-10.0)
        assert record.stock_level == 0.0
        assert applied == -3.0

    def test_floor_from_zero(self):
        record = InventoryRecord(product_name="Flour", stock_level=0.0)
        assert record.apply_delta(-1.0) == 0.0
        assert record.stock_level == 0.0

    def test_needs_reorder_at_threshold(self):
        record = InventoryRecord(product_name="Flour", stock_level=5.0, reorder_point=5.0)
        assert record.needs_reorder is True

    def test_does_not_need_reorder_above_threshold(self):
        record = InventoryRecord(product_name="Flour", stock_level=5.5, reorder_point=5.0)
        assert record.needs_reorder is False


class TestInventoryMovement:
    def test_signed_quantity_kept(self):
        movement = InventoryMovement(
            inventory_id=1,
            movement_type=MovementType.MANUFACTURING_CONSUME,
            quantity=-5.0,
            reference_type=ReferenceType.BATCH,
            reference_id="BATCH-1",
        )
        assert movement.quantity == -5.0
        assert movement.movement_type.value == "manufacturing_consume"
        assert movement.reference_type == ReferenceType.BATCH

    def test_movement_type_values(self):
        assert {t.value for t in MovementType} == {
            "receive",
            "manufacturing_consume",
            "manufacturing_produce",
            "manufacturing_adjust",
            "manual_adjustment",
            "sale",
            "wastage",
        }
