"""
SQLite implementation of batch record storage.

Every committed insert or update is published to the change feed so the
inventory reactor sees the batch lifecycle.
"""

import uuid

import aiosqlite

from batchcost.config import get_logger
from batchcost.core.entities.batch import BatchIngredient, BatchManufacturingRecord
from batchcost.core.entities.events import BATCH_TABLE, ChangeEvent, ChangeKind
from batchcost.core.exceptions import BatchNotFoundError
from batchcost.core.interfaces.batch_store import IBatchStore
from batchcost.core.interfaces.change_feed import IChangeFeed
from batchcost.infrastructure.events import get_change_feed
from batchcost.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from batchcost.infrastructure.storage.sqlite.rows import (
    iso,
    now,
    parse_date,
    parse_datetime,
)

logger = get_logger(__name__)


class SQLiteBatchStore(IBatchStore):
    """SQLite implementation of batch storage with change publication."""

    def __init__(self, change_feed: IChangeFeed | None = None):
        self._change_feed = change_feed

    @property
    def change_feed(self) -> IChangeFeed:
        if self._change_feed is None:
            self._change_feed = get_change_feed()
        return self._change_feed

    async def create_batch(
        self, batch: BatchManufacturingRecord
    ) -> BatchManufacturingRecord:
        """Create a batch with its ingredients and publish the insert."""
        if not batch.id:
            batch.id = str(uuid.uuid4())
        batch.updated_at = now()

        async with get_transaction("create_batch") as conn:
            await conn.execute(
                """
                INSERT INTO batch_records (
                    id, product_id, product_batch_number, batch_size, bags_count,
                    batch_started, batch_finished, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    batch.id,
                    batch.product_id,
                    batch.product_batch_number,
                    batch.batch_size,
                    batch.bags_count,
                    iso(batch.batch_started),
                    iso(batch.batch_finished),
                    iso(batch.created_at),
                    iso(batch.updated_at),
                ),
            )
            for ingredient in batch.ingredients:
                ingredient.batch_id = batch.id
                cursor = await conn.execute(
                    """
                    INSERT INTO batch_ingredients (
                        batch_id, raw_material_id, quantity, batch_number, best_before_date
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        ingredient.batch_id,
                        ingredient.raw_material_id,
                        ingredient.quantity,
                        ingredient.batch_number,
                        iso(ingredient.best_before_date),
                    ),
                )
                ingredient.id = cursor.lastrowid

        logger.info(
            "batch_created",
            batch_id=batch.id,
            product_id=batch.product_id,
            ingredients=len(batch.ingredients),
            finished=batch.is_finished,
        )
        await self.change_feed.publish(
            ChangeEvent(table=BATCH_TABLE, kind=ChangeKind.INSERT, new=batch.model_copy(deep=True))
        )
        return batch

    async def get_batch(self, batch_id: str) -> BatchManufacturingRecord | None:
        """Get batch by ID, ingredients included."""
        async with get_connection("get_batch") as conn:
            cursor = await conn.execute(
                "SELECT * FROM batch_records WHERE id = ?", (batch_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            batch = self._row_to_batch(row)

            ingredient_cursor = await conn.execute(
                "SELECT * FROM batch_ingredients WHERE batch_id = ? ORDER BY id",
                (batch_id,),
            )
            batch.ingredients = [
                self._row_to_ingredient(r) for r in await ingredient_cursor.fetchall()
            ]
            return batch

    async def list_ingredients(self, batch_id: str) -> list[BatchIngredient]:
        async with get_connection("list_batch_ingredients") as conn:
            cursor = await conn.execute(
                "SELECT * FROM batch_ingredients WHERE batch_id = ? ORDER BY id",
                (batch_id,),
            )
            return [self._row_to_ingredient(row) for row in await cursor.fetchall()]

    async def update_batch(
        self, batch: BatchManufacturingRecord
    ) -> BatchManufacturingRecord:
        """
        Update batch header fields and publish old and new rows.

        Ingredients are not rewritten.

        Raises:
            BatchNotFoundError: If the batch does not exist
        """
        old = await self.get_batch(batch.id)
        if old is None:
            raise BatchNotFoundError(batch.id)

        batch.updated_at = now()
        async with get_transaction("update_batch") as conn:
            await conn.execute(
                """
                UPDATE batch_records SET
                    product_batch_number = ?,
                    batch_size = ?,
                    bags_count = ?,
                    batch_started = ?,
                    batch_finished = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    batch.product_batch_number,
                    batch.batch_size,
                    batch.bags_count,
                    iso(batch.batch_started),
                    iso(batch.batch_finished),
                    iso(batch.updated_at),
                    batch.id,
                ),
            )

        logger.info(
            "batch_updated",
            batch_id=batch.id,
            finished=batch.is_finished,
            bags_count=batch.bags_count,
        )
        await self.change_feed.publish(
            ChangeEvent(
                table=BATCH_TABLE,
                kind=ChangeKind.UPDATE,
                old=old,
                new=batch.model_copy(deep=True),
            )
        )
        return batch

    @staticmethod
    def _row_to_batch(row: aiosqlite.Row) -> BatchManufacturingRecord:
        bags_count = row["bags_count"]
        batch_size = row["batch_size"]
        return BatchManufacturingRecord(
            id=row["id"],
            product_id=row["product_id"],
            product_batch_number=row["product_batch_number"],
            batch_size=float(batch_size) if batch_size is not None else None,
            bags_count=int(bags_count) if bags_count is not None else None,
            batch_started=parse_datetime(row["batch_started"]),
            batch_finished=parse_datetime(row["batch_finished"]),
            created_at=parse_datetime(row["created_at"]) or now(),
            updated_at=parse_datetime(row["updated_at"]) or now(),
        )

    @staticmethod
    def _row_to_ingredient(row: aiosqlite.Row) -> BatchIngredient:
        return BatchIngredient(
            id=row["id"],
            batch_id=row["batch_id"],
            raw_material_id=row["raw_material_id"],
            quantity=float(row["quantity"]),
            batch_number=row["batch_number"],
            best_before_date=parse_date(row["best_before_date"]),
        )
