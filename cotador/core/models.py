"""
Modelos de dados Pydantic para o sistema.
Define linhas brutas da planilha, itens de estoque e linhas de cotação.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from cotador.core.constants import OUT_OF_STOCK_MARK
from cotador.core.types import Category, PricingRule, QuoteStatus


def format_brl(value: Decimal | float | int) -> str:
    """Formata valor no padrão brasileiro (ex: R$ 1.234,56)."""
    return f"R$ {value:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


# =============================================================================
# LINHAS BRUTAS DA PLANILHA
# =============================================================================

class CatalogRow(BaseModel):
    """
    Linha bruta de uma aba do catálogo.
    Contém os valores exatamente como vieram do decodificador.
    """

    row_index: int = Field(..., ge=0)
    status: Optional[str] = None
    description: Optional[str] = None

    @field_validator("status", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        """Converte células não textuais (números, NaN) para texto ou None."""
        if v is None:
            return None
        if isinstance(v, float) and v != v:  # NaN vindo do pandas
            return None
        return str(v)

    @property
    def has_description(self) -> bool:
        """Indica se a descrição tem conteúdo após trim."""
        return bool(self.description and self.description.strip())

    @property
    def in_stock(self) -> bool:
        """Status "F" (após trim/maiúsculas) indica sem estoque."""
        return (self.status or "").strip().upper() != OUT_OF_STOCK_MARK


class ComponentRow(CatalogRow):
    """Linha da aba Componentes: custo do lote (C) e custo unitário (D)."""

    bulk_cost: Any = None
    unit_cost: Any = None


class CoverRow(CatalogRow):
    """Linha da aba Tampas: custo único (C)."""

    cost: Any = None


class CatalogWorkbook(BaseModel):
    """Conteúdo decodificado da planilha, separado por aba."""

    components: list[ComponentRow] = Field(default_factory=list)
    covers: list[CoverRow] = Field(default_factory=list)
    source: Optional[str] = None

    @computed_field
    @property
    def total_rows(self) -> int:
        """Total de linhas em ambas as abas."""
        return len(self.components) + len(self.covers)


# =============================================================================
# ESTOQUE
# =============================================================================

class InventoryItem(BaseModel):
    """
    Item de estoque validado. Imutável após a criação.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    normalized_description: str = Field(..., description="Usado só para busca")
    cost: float = Field(..., ge=0)
    category: Category
    source_sheet: str
    in_stock: bool = True
    pricing_rule: PricingRule = PricingRule.STANDARD

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        """Remove espaços das pontas da descrição."""
        v = v.strip()
        if not v:
            raise ValueError("Descrição não pode ser vazia")
        return v

    def format_cost(self) -> str:
        """Formata custo base para exibição."""
        return format_brl(self.cost)


class CatalogSummary(BaseModel):
    """Resumo do banco de dados de estoque."""

    total: int = 0
    components: int = 0
    covers: int = 0
    in_stock: int = 0
    out_of_stock: int = 0


# =============================================================================
# COTAÇÃO
# =============================================================================

class QuoteRequest(BaseModel):
    """
    Linha de cotação. Criada por linha do pedido e alterada apenas pelo
    pipeline de resolução até atingir um status final.
    """

    original_text: str
    status: QuoteStatus = QuoteStatus.PENDING
    matched_item: Optional[InventoryItem] = None
    final_price: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_match_consistency(self):
        """Item casado existe sse completed; preço existe sse há item."""
        if (self.matched_item is not None) != (self.status == QuoteStatus.COMPLETED):
            raise ValueError("matched_item deve existir somente com status completed")
        if (self.final_price is not None) != (self.matched_item is not None):
            raise ValueError("final_price deve existir somente com matched_item")
        return self

    def _ensure_open(self) -> None:
        if self.status.is_terminal:
            raise ValueError(f"Linha já finalizada com status {self.status.value}")

    def mark_processing(self) -> None:
        """Marca a linha como em processamento."""
        self._ensure_open()
        self.status = QuoteStatus.PROCESSING

    def complete(self, item: InventoryItem, final_price: Decimal) -> None:
        """Finaliza a linha com o item encontrado e o preço calculado."""
        self._ensure_open()
        self.matched_item = item
        self.final_price = final_price
        self.status = QuoteStatus.COMPLETED

    def mark_not_found(self) -> None:
        """Finaliza a linha sem correspondência."""
        self._ensure_open()
        self.status = QuoteStatus.NOT_FOUND

    @computed_field
    @property
    def counts_toward_total(self) -> bool:
        """Somente itens encontrados e em estoque entram no total."""
        return (
            self.status == QuoteStatus.COMPLETED
            and self.matched_item is not None
            and self.matched_item.in_stock
            and self.final_price is not None
        )

    def format_final_price(self) -> str:
        """Formata preço final para exibição."""
        if self.final_price is None:
            return "-"
        return format_brl(self.final_price)


class QuoteBatchResult(BaseModel):
    """Resultado de um lote de cotação."""

    requests: list[QuoteRequest] = Field(default_factory=list)
    total: Decimal = Decimal("0")
    catalog_generation: int = 0

    @computed_field
    @property
    def completed(self) -> int:
        """Linhas com item encontrado."""
        return sum(1 for r in self.requests if r.status == QuoteStatus.COMPLETED)

    @computed_field
    @property
    def not_found(self) -> int:
        """Linhas sem correspondência."""
        return sum(1 for r in self.requests if r.status == QuoteStatus.NOT_FOUND)

    def format_total(self) -> str:
        """Formata total disponível para exibição."""
        return format_brl(self.total)
