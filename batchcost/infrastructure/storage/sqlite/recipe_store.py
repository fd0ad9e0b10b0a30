"""SQLite implementation of recipe storage."""

import uuid

import aiosqlite

from batchcost.config import get_logger
from batchcost.core.entities.recipe import Recipe, RecipeItem
from batchcost.core.interfaces.recipe_store import IRecipeStore
from batchcost.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from batchcost.infrastructure.storage.sqlite.rows import iso, now, parse_datetime

logger = get_logger(__name__)


class SQLiteRecipeStore(IRecipeStore):
    """SQLite implementation of recipe and recipe item storage."""

    async def create_recipe(self, recipe: Recipe) -> Recipe:
        """Create a recipe together with its items."""
        if not recipe.id:
            recipe.id = str(uuid.uuid4())
        recipe.updated_at = now()
        async with get_transaction("create_recipe") as conn:
            await conn.execute(
                """
                INSERT INTO recipes (id, name, description, total_price, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    recipe.id,
                    recipe.name,
                    recipe.description,
                    recipe.total_price,
                    iso(recipe.created_at),
                    iso(recipe.updated_at),
                ),
            )
            for item in recipe.items:
                item.recipe_id = recipe.id
                cursor = await conn.execute(
                    """
                    INSERT INTO recipe_items (
                        recipe_id, raw_material_id, quantity, unit_cost, total_cost
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        item.recipe_id,
                        item.raw_material_id,
                        item.quantity,
                        item.unit_cost,
                        item.total_cost,
                    ),
                )
                item.id = cursor.lastrowid
        logger.info("recipe_created", recipe_id=recipe.id, items=len(recipe.items))
        return recipe

    async def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Get recipe by ID, items included."""
        async with get_connection("get_recipe") as conn:
            cursor = await conn.execute("SELECT * FROM recipes WHERE id = ?", (recipe_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            recipe = self._row_to_recipe(row)

            item_cursor = await conn.execute(
                "SELECT * FROM recipe_items WHERE recipe_id = ? ORDER BY id",
                (recipe_id,),
            )
            recipe.items = [self._row_to_item(r) for r in await item_cursor.fetchall()]
            return recipe

    async def list_recipe_ids(self) -> list[str]:
        async with get_connection("list_recipe_ids") as conn:
            cursor = await conn.execute("SELECT id FROM recipes ORDER BY name, id")
            return [row["id"] for row in await cursor.fetchall()]

    async def list_items(self, recipe_id: str) -> list[RecipeItem]:
        async with get_connection("list_recipe_items") as conn:
            cursor = await conn.execute(
                "SELECT * FROM recipe_items WHERE recipe_id = ? ORDER BY id",
                (recipe_id,),
            )
            return [self._row_to_item(row) for row in await cursor.fetchall()]

    async def list_recipe_ids_for_material(self, material_id: str) -> list[str]:
        async with get_connection("list_recipe_ids_for_material") as conn:
            cursor = await conn.execute(
                """
                SELECT DISTINCT recipe_id FROM recipe_items
                WHERE raw_material_id = ?
                ORDER BY recipe_id
                """,
                (material_id,),
            )
            return [row["recipe_id"] for row in await cursor.fetchall()]

    async def update_item_costs(
        self, item_id: int, unit_cost: float, total_cost: float
    ) -> None:
        async with get_transaction("update_recipe_item_costs") as conn:
            await conn.execute(
                "UPDATE recipe_items SET unit_cost = ?, total_cost = ? WHERE id = ?",
                (unit_cost, total_cost, item_id),
            )

    async def update_total_price(self, recipe_id: str, total_price: float) -> None:
        async with get_transaction("update_recipe_total_price") as conn:
            await conn.execute(
                "UPDATE recipes SET total_price = ?, updated_at = ? WHERE id = ?",
                (total_price, iso(now()), recipe_id),
            )

    @staticmethod
    def _row_to_recipe(row: aiosqlite.Row) -> Recipe:
        return Recipe(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            total_price=float(row["total_price"]),
            created_at=parse_datetime(row["created_at"]) or now(),
            updated_at=parse_datetime(row["updated_at"]) or now(),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> RecipeItem:
        return RecipeItem(
            id=row["id"],
            recipe_id=row["recipe_id"],
            raw_material_id=row["raw_material_id"],
            quantity=float(row["quantity"]),
            unit_cost=float(row["unit_cost"]),
            total_cost=float(row["total_cost"]),
        )
