"""
Storage em arquivo JSON.
Escreve em arquivo temporário e troca com os.replace para gravação atômica.
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from cotador.core.exceptions import SnapshotCorruptedError, StorageError
from cotador.core.models import InventoryItem
from cotador.core.types import StorageType
from cotador.storage.base import BaseStorage

SNAPSHOT_VERSION = 1

_items_adapter = TypeAdapter(list[InventoryItem])


class JSONStorage(BaseStorage):
    """
    Snapshot do catálogo em um único arquivo JSON.
    Fácil de inspecionar e copiar entre máquinas.
    """

    def __init__(self, base_path: Path, filename: str = "inventory.json"):
        """Inicializa o storage JSON."""
        super().__init__(base_path)
        self.filepath = self.base_path / filename

    @property
    def storage_type(self) -> StorageType:
        return StorageType.JSON

    async def save_items(self, items: list[InventoryItem]) -> str:
        payload = {
            "version": SNAPSHOT_VERSION,
            "saved_at": datetime.now().isoformat(),
            "items": [item.model_dump(mode="json") for item in items],
        }

        fd, tmp_name = tempfile.mkstemp(
            dir=self.base_path,
            prefix=".inventory_",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.filepath)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(
                "Erro ao salvar snapshot",
                storage_type=self.storage_type.value,
                path=str(self.filepath),
                cause=e,
            )

        self.logger.info(
            "Snapshot salvo em JSON",
            count=len(items),
            filepath=str(self.filepath),
        )

        return str(self.filepath)

    async def load_items(self) -> list[InventoryItem]:
        if not self.filepath.exists():
            return []

        try:
            with open(self.filepath, encoding="utf-8") as f:
                payload = json.load(f)
            items = _items_adapter.validate_python(payload["items"])
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as e:
            raise SnapshotCorruptedError(
                "Snapshot ilegível",
                storage_type=self.storage_type.value,
                path=str(self.filepath),
                cause=e,
            )

        self.logger.debug(
            "Snapshot carregado",
            count=len(items),
            filepath=str(self.filepath),
        )
        return items

    async def clear(self) -> None:
        self.filepath.unlink(missing_ok=True)
        self.logger.info("Snapshot removido", filepath=str(self.filepath))
