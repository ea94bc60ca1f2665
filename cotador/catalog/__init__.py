"""
Módulo de catálogo: leitura da planilha, construção e guarda do estoque.
"""

from cotador.catalog.inventory import Inventory, InventoryCatalog
from cotador.catalog.builder import IngestionResult, InventoryBuilder, items_signature
from cotador.catalog.reader import WorkbookReader

__all__ = [
    "Inventory",
    "InventoryCatalog",
    "IngestionResult",
    "InventoryBuilder",
    "items_signature",
    "WorkbookReader",
]
