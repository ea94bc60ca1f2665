"""
Enumerações do sistema.
"""

from enum import Enum


class Category(str, Enum):
    """Categoria do item de estoque (aba de origem)."""

    COMPONENT = "Componente"
    COVER = "Tampa"


class PricingRule(str, Enum):
    """Regra de precificação atribuída na importação."""

    STANDARD = "standard"   # custo 1 peça (ou tampa) x 2
    FALLBACK = "fallback"   # custo do lote de 5 peças x 3.5


class QuoteStatus(str, Enum):
    """Status de uma linha de cotação."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    NOT_FOUND = "not_found"

    @property
    def is_terminal(self) -> bool:
        """Indica se o status é final."""
        return self in (QuoteStatus.COMPLETED, QuoteStatus.NOT_FOUND)


class StorageType(str, Enum):
    """Tipos de storage disponíveis para o snapshot do catálogo."""

    JSON = "json"
    SQLITE = "sqlite"
