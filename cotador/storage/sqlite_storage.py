"""
Storage SQLite para o snapshot do catálogo.
Cada gravação substitui a tabela inteira dentro de uma única transação.
"""

from pathlib import Path

import aiosqlite

from cotador.core.exceptions import SnapshotCorruptedError, StorageError
from cotador.core.models import InventoryItem
from cotador.core.types import Category, PricingRule, StorageType
from cotador.storage.base import BaseStorage


class SQLiteStorage(BaseStorage):
    """
    Storage usando SQLite.
    Útil quando outras ferramentas precisam consultar o estoque.
    """

    def __init__(self, base_path: Path, db_name: str = "cotador.db"):
        """
        Inicializa o storage SQLite.

        Args:
            base_path: Diretório base
            db_name: Nome do arquivo do banco
        """
        super().__init__(base_path)
        self.db_path = self.base_path / db_name
        self._initialized = False

    @property
    def storage_type(self) -> StorageType:
        return StorageType.SQLITE

    async def _ensure_initialized(self) -> None:
        """Garante que a tabela existe."""
        if self._initialized:
            return

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS inventory (
                    id TEXT PRIMARY KEY,
                    description TEXT NOT NULL,
                    normalized_description TEXT NOT NULL,
                    cost REAL NOT NULL,
                    category TEXT NOT NULL,
                    source_sheet TEXT NOT NULL,
                    in_stock INTEGER NOT NULL,
                    pricing_rule TEXT NOT NULL
                )
            """)
            await db.commit()

        self._initialized = True
        self.logger.debug("SQLite inicializado", db_path=str(self.db_path))

    async def save_items(self, items: list[InventoryItem]) -> str:
        try:
            await self._ensure_initialized()

            async with aiosqlite.connect(self.db_path) as db:
                # DELETE + INSERT na mesma transação: leitores veem tudo ou nada
                await db.execute("DELETE FROM inventory")
                await db.executemany("""
                    INSERT INTO inventory
                    (id, description, normalized_description, cost, category,
                     source_sheet, in_stock, pricing_rule)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, [
                    (
                        item.id,
                        item.description,
                        item.normalized_description,
                        item.cost,
                        item.category.value,
                        item.source_sheet,
                        int(item.in_stock),
                        item.pricing_rule.value,
                    )
                    for item in items
                ])
                await db.commit()
        except aiosqlite.Error as e:
            raise StorageError(
                "Erro ao salvar snapshot",
                storage_type=self.storage_type.value,
                path=str(self.db_path),
                cause=e,
            )

        self.logger.info(
            "Snapshot salvo no SQLite",
            count=len(items),
            db_path=str(self.db_path),
        )

        return str(self.db_path)

    async def load_items(self) -> list[InventoryItem]:
        if not self.db_path.exists():
            return []

        try:
            await self._ensure_initialized()

            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                async with db.execute("SELECT * FROM inventory ORDER BY rowid") as cursor:
                    rows = await cursor.fetchall()

            items = [
                InventoryItem(
                    id=row["id"],
                    description=row["description"],
                    normalized_description=row["normalized_description"],
                    cost=row["cost"],
                    category=Category(row["category"]),
                    source_sheet=row["source_sheet"],
                    in_stock=bool(row["in_stock"]),
                    pricing_rule=PricingRule(row["pricing_rule"]),
                )
                for row in rows
            ]
        except (aiosqlite.Error, ValueError) as e:
            raise SnapshotCorruptedError(
                "Snapshot ilegível",
                storage_type=self.storage_type.value,
                path=str(self.db_path),
                cause=e,
            )

        return items

    async def clear(self) -> None:
        if not self.db_path.exists():
            return

        await self._ensure_initialized()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM inventory")
            await db.commit()

        self.logger.info("Snapshot removido", db_path=str(self.db_path))
