"""
SQLite implementation of raw material storage.

Handles raw materials and their stock receipts.
"""

import uuid

import aiosqlite

from batchcost.config import get_logger
from batchcost.core.entities.material import RawMaterial, StockReceipt
from batchcost.core.interfaces.material_store import IMaterialStore
from batchcost.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from batchcost.infrastructure.storage.sqlite.rows import iso, now, parse_datetime

logger = get_logger(__name__)


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of raw material storage."""

    async def create_material(self, material: RawMaterial) -> RawMaterial:
        """Create a new raw material."""
        if not material.id:
            material.id = str(uuid.uuid4())
        material.updated_at = now()
        async with get_transaction("create_material") as conn:
            await conn.execute(
                """
                INSERT INTO raw_materials (
                    id, name, unit, category, minimum_stock, current_stock,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    material.id,
                    material.name,
                    material.unit,
                    material.category,
                    material.minimum_stock,
                    material.current_stock,
                    iso(material.created_at),
                    iso(material.updated_at),
                ),
            )
        logger.info("raw_material_created", material_id=material.id, name=material.name)
        return material

    async def get_material(self, material_id: str) -> RawMaterial | None:
        """Get raw material by ID."""
        async with get_connection("get_material") as conn:
            cursor = await conn.execute(
                "SELECT * FROM raw_materials WHERE id = ?", (material_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def list_materials(
        self, limit: int = 100, offset: int = 0
    ) -> list[RawMaterial]:
        """List raw materials ordered by name."""
        async with get_connection("list_materials") as conn:
            cursor = await conn.execute(
                "SELECT * FROM raw_materials ORDER BY name LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    async def update_current_stock(self, material_id: str, current_stock: float) -> None:
        """Overwrite the material's current stock level."""
        async with get_transaction("update_current_stock") as conn:
            await conn.execute(
                "UPDATE raw_materials SET current_stock = ?, updated_at = ? WHERE id = ?",
                (current_stock, iso(now()), material_id),
            )

    async def add_receipt(self, receipt: StockReceipt) -> StockReceipt:
        """Record a stock receipt."""
        async with get_transaction("add_receipt") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_receipts (
                    raw_material_id, quantity, unit_price, is_accepted,
                    supplier, invoice_number, received_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    receipt.raw_material_id,
                    receipt.quantity,
                    receipt.unit_price,
                    1 if receipt.is_accepted else 0,
                    receipt.supplier,
                    receipt.invoice_number,
                    iso(receipt.received_at),
                ),
            )
            receipt.id = cursor.lastrowid
        logger.info(
            "stock_receipt_recorded",
            receipt_id=receipt.id,
            material_id=receipt.raw_material_id,
            accepted=receipt.is_accepted,
        )
        return receipt

    async def list_accepted_receipts(self, material_id: str) -> list[StockReceipt]:
        """List accepted receipts for a material, oldest first."""
        async with get_connection("list_accepted_receipts") as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_receipts
                WHERE raw_material_id = ? AND is_accepted = 1
                ORDER BY received_at, id
                """,
                (material_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_receipt(row) for row in rows]

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> RawMaterial:
        return RawMaterial(
            id=row["id"],
            name=row["name"],
            unit=row["unit"],
            category=row["category"],
            minimum_stock=float(row["minimum_stock"]),
            current_stock=float(row["current_stock"]),
            created_at=parse_datetime(row["created_at"]) or now(),
            updated_at=parse_datetime(row["updated_at"]) or now(),
        )

    @staticmethod
    def _row_to_receipt(row: aiosqlite.Row) -> StockReceipt:
        return StockReceipt(
            id=row["id"],
            raw_material_id=row["raw_material_id"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
            is_accepted=bool(row["is_accepted"]),
            supplier=row["supplier"],
            invoice_number=row["invoice_number"],
            received_at=parse_datetime(row["received_at"]) or now(),
        )
