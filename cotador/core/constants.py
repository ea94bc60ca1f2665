"""
Constantes de precificação, matching e layout da planilha.
"""

import re
from decimal import Decimal
from typing import Final

from cotador.core.types import PricingRule


# =============================================================================
# PRECIFICAÇÃO
# =============================================================================

PRICE_MULTIPLIERS: Final[dict[PricingRule, Decimal]] = {
    PricingRule.STANDARD: Decimal("2.0"),
    PricingRule.FALLBACK: Decimal("3.5"),
}

# Preço final é sempre arredondado para cima até o próximo múltiplo deste valor
PRICE_ROUNDING_STEP: Final[Decimal] = Decimal("5")


# =============================================================================
# MOEDA
# =============================================================================

# Símbolo monetário no início do texto (ex: "R$ 6,85", "R$6,85")
CURRENCY_SYMBOL_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*(?:R\$|US\$|\$)\s*",
    re.IGNORECASE,
)


# =============================================================================
# MATCHING
# =============================================================================

# Tokens com até este tamanho são descartados da busca
MIN_TOKEN_LENGTH: Final[int] = 2

DEFAULT_CANDIDATE_LIMIT: Final[int] = 40

# Linhas de cumprimento/despedida ignoradas no pedido (já normalizadas)
GREETING_STOPLIST: Final[frozenset[str]] = frozenset({
    "bom dia",
    "boa tarde",
    "boa noite",
    "ola",
    "tchau",
})


# =============================================================================
# PLANILHA DE ESTOQUE
# =============================================================================

COMPONENTS_SHEET: Final[str] = "Componentes"
COVERS_SHEET: Final[str] = "Tampas"

# Marcador da coluna de status que indica item sem estoque
OUT_OF_STOCK_MARK: Final[str] = "F"

# Colunas posicionais (A=0, B=1, ...)
COMPONENT_COLUMNS: Final[dict[str, int]] = {
    "status": 0,
    "description": 1,
    "bulk_cost": 2,     # C: preço do lote de 5 peças
    "unit_cost": 3,     # D: preço de 1 peça
}

COVER_COLUMNS: Final[dict[str, int]] = {
    "status": 0,
    "description": 1,
    "cost": 2,
}

ID_PREFIXES: Final[dict[str, str]] = {
    COMPONENTS_SHEET: "COMP",
    COVERS_SHEET: "TAMP",
}
