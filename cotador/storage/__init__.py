"""
Módulo de storage: persistência do snapshot do catálogo.
Suporta JSON e SQLite.
"""

from pathlib import Path

from cotador.core.types import StorageType
from cotador.storage.base import BaseStorage
from cotador.storage.json_storage import JSONStorage
from cotador.storage.sqlite_storage import SQLiteStorage


def create_storage(
    storage_type: StorageType | str,
    base_path: Path,
) -> BaseStorage:
    """
    Cria o backend de storage.

    Args:
        storage_type: Tipo de storage (json ou sqlite)
        base_path: Diretório base para dados

    Returns:
        Instância do backend
    """
    backends: dict[StorageType, type[BaseStorage]] = {
        StorageType.JSON: JSONStorage,
        StorageType.SQLITE: SQLiteStorage,
    }
    return backends[StorageType(storage_type)](base_path)


__all__ = [
    "BaseStorage",
    "StorageType",
    "JSONStorage",
    "SQLiteStorage",
    "create_storage",
]
