"""
Classe base abstrata para storage.
Define a interface de persistência do snapshot do catálogo.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from config.logging_config import LoggerMixin
from cotador.core.models import InventoryItem
from cotador.core.types import StorageType


class BaseStorage(ABC, LoggerMixin):
    """
    Classe base abstrata para backends de storage.

    O snapshot é opaco e sem ordem: salvar substitui tudo de forma atômica,
    carregar devolve tudo ou nada. Ausência de snapshot = catálogo vazio.
    """

    def __init__(self, base_path: Path):
        """
        Inicializa o storage.

        Args:
            base_path: Diretório base para armazenamento
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    @property
    @abstractmethod
    def storage_type(self) -> StorageType:
        """Retorna o tipo de storage."""
        pass

    @abstractmethod
    async def save_items(self, items: list[InventoryItem]) -> str:
        """
        Substitui o snapshot pelos itens informados.

        Returns:
            Identificador/path do snapshot salvo

        Raises:
            StorageError: Falha de escrita (snapshot anterior preservado)
        """
        pass

    @abstractmethod
    async def load_items(self) -> list[InventoryItem]:
        """
        Carrega o snapshot.

        Returns:
            Itens salvos; lista vazia se não houver snapshot

        Raises:
            SnapshotCorruptedError: Snapshot existe mas é ilegível
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove o snapshot."""
        pass
