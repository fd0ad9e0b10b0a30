"""SQLite implementation of final product storage."""

import uuid

import aiosqlite

from batchcost.config import get_logger
from batchcost.core.entities.product import FinalProduct, UnitConversion
from batchcost.core.interfaces.product_store import IProductStore
from batchcost.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from batchcost.infrastructure.storage.sqlite.rows import iso, now, parse_datetime

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """SQLite implementation of final product and unit conversion storage."""

    async def create_product(self, product: FinalProduct) -> FinalProduct:
        if not product.id:
            product.id = str(uuid.uuid4())
        product.updated_at = now()
        async with get_transaction("create_product") as conn:
            await conn.execute(
                """
                INSERT INTO final_products (
                    id, name, category, recipe_id, unit_price, recipe_cost,
                    markup, profit_margin, profit_per_item, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.id,
                    product.name,
                    product.category,
                    product.recipe_id,
                    product.unit_price,
                    product.recipe_cost,
                    product.markup,
                    product.profit_margin,
                    product.profit_per_item,
                    iso(product.created_at),
                    iso(product.updated_at),
                ),
            )
        logger.info("final_product_created", product_id=product.id, name=product.name)
        return product

    async def get_product(self, product_id: str) -> FinalProduct | None:
        async with get_connection("get_product") as conn:
            cursor = await conn.execute(
                "SELECT * FROM final_products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def list_products_for_recipe(self, recipe_id: str) -> list[FinalProduct]:
        async with get_connection("list_products_for_recipe") as conn:
            cursor = await conn.execute(
                "SELECT * FROM final_products WHERE recipe_id = ? ORDER BY name",
                (recipe_id,),
            )
            return [self._row_to_product(row) for row in await cursor.fetchall()]

    async def update_costing(self, product: FinalProduct) -> FinalProduct:
        """Persist the derived cost fields only."""
        product.updated_at = now()
        async with get_transaction("update_product_costing") as conn:
            await conn.execute(
                """
                UPDATE final_products SET
                    recipe_cost = ?,
                    markup = ?,
                    profit_margin = ?,
                    profit_per_item = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    product.recipe_cost,
                    product.markup,
                    product.profit_margin,
                    product.profit_per_item,
                    iso(product.updated_at),
                    product.id,
                ),
            )
        return product

    async def upsert_unit_conversion(self, conversion: UnitConversion) -> UnitConversion:
        conversion.updated_at = now()
        async with get_transaction("upsert_unit_conversion") as conn:
            await conn.execute(
                """
                INSERT INTO unit_conversions (product_id, kg_per_bag, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(product_id) DO UPDATE SET
                    kg_per_bag = excluded.kg_per_bag,
                    updated_at = excluded.updated_at
                """,
                (conversion.product_id, conversion.kg_per_bag, iso(conversion.updated_at)),
            )
        logger.info(
            "unit_conversion_saved",
            product_id=conversion.product_id,
            kg_per_bag=round(conversion.kg_per_bag, 4),
        )
        return conversion

    async def get_unit_conversion(self, product_id: str) -> UnitConversion | None:
        async with get_connection("get_unit_conversion") as conn:
            cursor = await conn.execute(
                "SELECT * FROM unit_conversions WHERE product_id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return UnitConversion(
                product_id=row["product_id"],
                kg_per_bag=float(row["kg_per_bag"]),
                updated_at=parse_datetime(row["updated_at"]) or now(),
            )

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> FinalProduct:
        return FinalProduct(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            recipe_id=row["recipe_id"],
            unit_price=float(row["unit_price"]),
            recipe_cost=float(row["recipe_cost"]),
            markup=float(row["markup"]),
            profit_margin=float(row["profit_margin"]),
            profit_per_item=float(row["profit_per_item"]),
            created_at=parse_datetime(row["created_at"]) or now(),
            updated_at=parse_datetime(row["updated_at"]) or now(),
        )
