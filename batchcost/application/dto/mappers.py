"""Entity to response DTO conversions shared by several use cases."""

from batchcost.application.dto.responses import (
    BatchIngredientResponse,
    BatchResponse,
    CostUpdateResponse,
    InventoryMovementResponse,
    InventoryRecordResponse,
    StockReceiptResponse,
)
from batchcost.core.entities.batch import BatchManufacturingRecord
from batchcost.core.entities.inventory import InventoryMovement, InventoryRecord
from batchcost.core.entities.material import StockReceipt
from batchcost.core.services.costing import CostUpdateResult


def record_response(record: InventoryRecord) -> InventoryRecordResponse:
    return InventoryRecordResponse(
        id=record.id,  # type: ignore[arg-type]
        product_name=record.product_name,
        stock_level=record.stock_level,
        unit=record.unit,
        is_final_product=record.is_final_product,
        is_recipe_based=record.is_recipe_based,
        reorder_point=record.reorder_point,
        needs_reorder=record.needs_reorder,
        last_updated=record.last_updated,
    )


def movement_response(movement: InventoryMovement) -> InventoryMovementResponse:
    return InventoryMovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        inventory_id=movement.inventory_id,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        reference_type=movement.reference_type.value if movement.reference_type else None,
        reference_id=movement.reference_id,
        notes=movement.notes,
        created_at=movement.created_at,
    )


def receipt_response(receipt: StockReceipt) -> StockReceiptResponse:
    return StockReceiptResponse(
        id=receipt.id,  # type: ignore[arg-type]
        raw_material_id=receipt.raw_material_id,
        quantity=receipt.quantity,
        unit_price=receipt.unit_price,
        total_cost=receipt.total_cost,
        is_accepted=receipt.is_accepted,
        supplier=receipt.supplier,
        invoice_number=receipt.invoice_number,
        received_at=receipt.received_at,
    )


def cost_update_response(result: CostUpdateResult) -> CostUpdateResponse:
    return CostUpdateResponse(
        recipes_updated=result.recipes_updated,
        recipes_skipped=result.recipes_skipped,
        products_updated=result.products_updated,
    )


def batch_response(batch: BatchManufacturingRecord) -> BatchResponse:
    return BatchResponse(
        id=batch.id,  # type: ignore[arg-type]
        product_id=batch.product_id,
        product_batch_number=batch.product_batch_number,
        batch_size=batch.batch_size,
        bags_count=batch.bags_count,
        batch_started=batch.batch_started,
        batch_finished=batch.batch_finished,
        state=batch.state.value,
        kg_per_bag=batch.kg_per_bag,
        ingredients=[
            BatchIngredientResponse(
                id=ingredient.id,  # type: ignore[arg-type]
                raw_material_id=ingredient.raw_material_id,
                quantity=ingredient.quantity,
                batch_number=ingredient.batch_number,
                best_before_date=ingredient.best_before_date,
            )
            for ingredient in batch.ingredients
        ],
        created_at=batch.created_at,
        updated_at=batch.updated_at,
    )
