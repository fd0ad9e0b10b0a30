"""
SQLite implementation of inventory storage.

Stock levels live in the ``inventory`` table; every change is appended to
``inventory_movements``.
"""

import aiosqlite

from batchcost.config import get_logger
from batchcost.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementType,
    ReferenceType,
)
from batchcost.core.interfaces.inventory_store import IInventoryStore
from batchcost.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from batchcost.infrastructure.storage.sqlite.rows import iso, now, parse_datetime

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory record and movement storage."""

    # Inventory records

    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create a new inventory record."""
        record.last_updated = now()
        async with get_transaction("create_inventory_record") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory (
                    product_name, stock_level, unit, is_final_product,
                    is_recipe_based, reorder_point, last_updated
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.product_name,
                    record.stock_level,
                    record.unit,
                    1 if record.is_final_product else 0,
                    1 if record.is_recipe_based else 0,
                    record.reorder_point,
                    iso(record.last_updated),
                ),
            )
            record.id = cursor.lastrowid
        logger.info(
            "inventory_record_created",
            inventory_id=record.id,
            product_name=record.product_name,
            is_final_product=record.is_final_product,
        )
        return record

    async def get_record(self, record_id: int) -> InventoryRecord | None:
        async with get_connection("get_inventory_record") as conn:
            cursor = await conn.execute("SELECT * FROM inventory WHERE id = ?", (record_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def find_by_name(
        self, product_name: str, is_final_product: bool
    ) -> InventoryRecord | None:
        """First record whose name matches exactly, in creation order."""
        async with get_connection("find_inventory_record") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory
                WHERE product_name = ? AND is_final_product = ?
                ORDER BY id
                LIMIT 1
                """,
                (product_name, 1 if is_final_product else 0),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def update_stock_level(self, record: InventoryRecord) -> InventoryRecord:
        record.last_updated = now()
        async with get_transaction("update_stock_level") as conn:
            await conn.execute(
                "UPDATE inventory SET stock_level = ?, last_updated = ? WHERE id = ?",
                (record.stock_level, iso(record.last_updated), record.id),
            )
        return record

    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        async with get_connection("list_inventory_records") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory
                ORDER BY is_final_product, product_name, id
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            return [self._row_to_record(row) for row in await cursor.fetchall()]

    async def list_low_stock(
        self, limit: int = 100, offset: int = 0
    ) -> list[InventoryRecord]:
        async with get_connection("list_low_stock") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory
                WHERE stock_level <= reorder_point
                ORDER BY stock_level, product_name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            return [self._row_to_record(row) for row in await cursor.fetchall()]

    # Movements

    async def add_movement(self, movement: InventoryMovement) -> InventoryMovement:
        async with get_transaction("add_inventory_movement") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_movements (
                    inventory_id, movement_type, quantity, reference_type,
                    reference_id, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.inventory_id,
                    movement.movement_type.value,
                    movement.quantity,
                    movement.reference_type.value if movement.reference_type else None,
                    movement.reference_id,
                    movement.notes,
                    iso(movement.created_at),
                ),
            )
            movement.id = cursor.lastrowid
        logger.debug(
            "inventory_movement_recorded",
            movement_id=movement.id,
            inventory_id=movement.inventory_id,
            movement_type=movement.movement_type.value,
            quantity=movement.quantity,
        )
        return movement

    async def get_movements(
        self, inventory_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryMovement]:
        async with get_connection("get_inventory_movements") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                WHERE inventory_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (inventory_id, limit, offset),
            )
            return [self._row_to_movement(row) for row in await cursor.fetchall()]

    async def get_movements_by_reference(
        self, reference_type: ReferenceType, reference_id: str
    ) -> list[InventoryMovement]:
        async with get_connection("get_movements_by_reference") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                WHERE reference_type = ? AND reference_id = ?
                ORDER BY id
                """,
                (reference_type.value, reference_id),
            )
            return [self._row_to_movement(row) for row in await cursor.fetchall()]

    async def has_movement(
        self,
        reference_type: ReferenceType,
        reference_id: str,
        movement_type: MovementType,
    ) -> bool:
        async with get_connection("has_movement") as conn:
            cursor = await conn.execute(
                """
                SELECT 1 FROM inventory_movements
                WHERE reference_type = ? AND reference_id = ? AND movement_type = ?
                LIMIT 1
                """,
                (reference_type.value, reference_id, movement_type.value),
            )
            return await cursor.fetchone() is not None

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        return InventoryRecord(
            id=row["id"],
            product_name=row["product_name"],
            stock_level=float(row["stock_level"]),
            unit=row["unit"],
            is_final_product=bool(row["is_final_product"]),
            is_recipe_based=bool(row["is_recipe_based"]),
            reorder_point=float(row["reorder_point"]),
            last_updated=parse_datetime(row["last_updated"]) or now(),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
        reference_type = row["reference_type"]
        return InventoryMovement(
            id=row["id"],
            inventory_id=row["inventory_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            reference_type=ReferenceType(reference_type) if reference_type else None,
            reference_id=row["reference_id"],
            notes=row["notes"],
            created_at=parse_datetime(row["created_at"]) or now(),
        )
