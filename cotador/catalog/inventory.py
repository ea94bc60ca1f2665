"""
Catálogo de estoque em memória.

`Inventory` é um snapshot imutável lido pelas cotações; `InventoryCatalog`
guarda o snapshot corrente e o substitui por inteiro a cada importação.
"""

import asyncio
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from config.logging_config import LoggerMixin
from cotador.core.models import CatalogSummary, InventoryItem
from cotador.core.types import Category


class Inventory:
    """Snapshot imutável do catálogo, indexado por id."""

    def __init__(self, items: Iterable[InventoryItem] = (), generation: int = 0):
        self._items: tuple[InventoryItem, ...] = tuple(items)
        self._by_id = MappingProxyType({item.id: item for item in self._items})
        self.generation = generation

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    @property
    def items(self) -> tuple[InventoryItem, ...]:
        return self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_id: str) -> Optional[InventoryItem]:
        """Busca item pelo id; None se não existir."""
        return self._by_id.get(item_id)

    def summary(self) -> CatalogSummary:
        """Contagens por categoria e disponibilidade."""
        in_stock = sum(1 for i in self._items if i.in_stock)
        return CatalogSummary(
            total=len(self._items),
            components=sum(1 for i in self._items if i.category == Category.COMPONENT),
            covers=sum(1 for i in self._items if i.category == Category.COVER),
            in_stock=in_stock,
            out_of_stock=len(self._items) - in_stock,
        )


class InventoryCatalog(LoggerMixin):
    """
    Dono do catálogo corrente.

    Escritas (importação, reset) devem ser feitas sob `write_lock`. Cada
    escrita incrementa `generation`, permitindo detectar cotações calculadas
    sobre um catálogo já substituído.
    """

    def __init__(self, items: Iterable[InventoryItem] = ()):
        self._generation = 0
        self._current = Inventory(items, generation=self._generation)
        self._write_lock: Optional[asyncio.Lock] = None

    @property
    def write_lock(self) -> asyncio.Lock:
        """Lock de escritor único; criado sob demanda dentro do event loop."""
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        return self._write_lock

    @property
    def current(self) -> Inventory:
        """Snapshot corrente (nunca alterado no lugar)."""
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        """Indica se a geração informada ainda é a vigente."""
        return generation == self._generation

    def replace(self, items: Iterable[InventoryItem]) -> Inventory:
        """Substitui o catálogo inteiro por um novo snapshot."""
        self._generation += 1
        self._current = Inventory(items, generation=self._generation)

        self.logger.info(
            "Catálogo substituído",
            items=len(self._current),
            generation=self._generation,
        )
        return self._current

    def clear(self) -> Inventory:
        """Esvazia o catálogo."""
        self._generation += 1
        self._current = Inventory((), generation=self._generation)

        self.logger.info("Catálogo limpo", generation=self._generation)
        return self._current
