"""
Módulo core: modelos de dados, exceções, tipos e constantes.
"""

from cotador.core.models import (
    CatalogRow,
    CatalogSummary,
    CatalogWorkbook,
    ComponentRow,
    CoverRow,
    InventoryItem,
    QuoteBatchResult,
    QuoteRequest,
    format_brl,
)
from cotador.core.exceptions import (
    CotadorError,
    IngestionError,
    WorkbookError,
    OracleError,
    StorageError,
    SnapshotCorruptedError,
    StaleCatalogError,
)
from cotador.core.types import (
    Category,
    PricingRule,
    QuoteStatus,
    StorageType,
)

__all__ = [
    # Models
    "CatalogRow",
    "CatalogSummary",
    "CatalogWorkbook",
    "ComponentRow",
    "CoverRow",
    "InventoryItem",
    "QuoteBatchResult",
    "QuoteRequest",
    "format_brl",
    # Exceptions
    "CotadorError",
    "IngestionError",
    "WorkbookError",
    "OracleError",
    "StorageError",
    "SnapshotCorruptedError",
    "StaleCatalogError",
    # Types
    "Category",
    "PricingRule",
    "QuoteStatus",
    "StorageType",
]
