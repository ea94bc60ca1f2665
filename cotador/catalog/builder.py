"""
Construtor do estoque a partir das linhas da planilha.
Valida cada linha, escolhe o custo e atribui a regra de precificação.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional
from uuid import uuid4

from pydantic import ValidationError

from config.logging_config import LoggerMixin
from cotador.catalog.inventory import InventoryCatalog
from cotador.core.constants import COMPONENTS_SHEET, COVERS_SHEET, ID_PREFIXES
from cotador.core.exceptions import IngestionError
from cotador.core.models import (
    CatalogRow,
    CatalogWorkbook,
    ComponentRow,
    CoverRow,
    InventoryItem,
)
from cotador.core.types import Category, PricingRule
from cotador.pipeline.normalizer import TextNormalizer
from cotador.pipeline.parser import CurrencyParser
from cotador.storage.base import BaseStorage


@dataclass
class IngestionResult:
    """Itens produzidos por uma importação e contagens por aba."""

    items: list[InventoryItem] = field(default_factory=list)
    components_accepted: int = 0
    components_skipped: int = 0
    covers_accepted: int = 0
    covers_skipped: int = 0
    source: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def skipped(self) -> int:
        return self.components_skipped + self.covers_skipped


class InventoryBuilder(LoggerMixin):
    """
    Converte linhas brutas em itens de estoque.

    Regras:
    - Componentes: custo de 1 peça (D) > 0 => standard; senão custo do lote
      (C) > 0 => fallback; senão a linha é descartada.
    - Tampas: só exige descrição; custo pode ser 0; sempre standard.
    - Status "F" => sem estoque.
    """

    def __init__(
        self,
        parser: Optional[CurrencyParser] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        self.parser = parser or CurrencyParser()
        self.normalizer = normalizer or TextNormalizer()

    def build(self, workbook: CatalogWorkbook) -> IngestionResult:
        """
        Constrói os itens das duas abas.

        Args:
            workbook: Linhas decodificadas da planilha

        Returns:
            IngestionResult com itens e contagens

        Raises:
            IngestionError: Se nenhuma linha válida for encontrada
        """
        result = IngestionResult(source=workbook.source)

        for row in workbook.components:
            item = self.build_component(row)
            if item is None:
                result.components_skipped += 1
                continue
            result.items.append(item)
            result.components_accepted += 1

        for row in workbook.covers:
            item = self.build_cover(row)
            if item is None:
                result.covers_skipped += 1
                continue
            result.items.append(item)
            result.covers_accepted += 1

        self.logger.info(
            "Linhas processadas",
            source=workbook.source,
            components=result.components_accepted,
            covers=result.covers_accepted,
            skipped=result.skipped,
        )

        if not result.items:
            raise IngestionError(
                source=workbook.source,
                details={"rows": workbook.total_rows},
            )

        return result

    def build_component(self, row: ComponentRow) -> Optional[InventoryItem]:
        """Cria item da aba Componentes ou None se a linha for inválida."""
        if not row.has_description:
            return None

        unit_cost = float(self.parser.parse(row.unit_cost))
        bulk_cost = float(self.parser.parse(row.bulk_cost))

        if unit_cost > 0:
            cost, rule = unit_cost, PricingRule.STANDARD
        elif bulk_cost > 0:
            cost, rule = bulk_cost, PricingRule.FALLBACK
        else:
            return None

        return self._make_item(row, cost, Category.COMPONENT, COMPONENTS_SHEET, rule)

    def build_cover(self, row: CoverRow) -> Optional[InventoryItem]:
        """Cria item da aba Tampas ou None se a linha for inválida."""
        if not row.has_description:
            return None

        cost = float(self.parser.parse(row.cost))
        return self._make_item(row, cost, Category.COVER, COVERS_SHEET, PricingRule.STANDARD)

    def _make_item(
        self,
        row: CatalogRow,
        cost: float,
        category: Category,
        sheet: str,
        rule: PricingRule,
    ) -> Optional[InventoryItem]:
        description = row.description.strip()
        try:
            return InventoryItem(
                id=f"{ID_PREFIXES[sheet]}-{row.row_index}-{uuid4().hex[:8]}",
                description=description,
                normalized_description=self.normalizer.normalize(description),
                cost=cost,
                category=category,
                source_sheet=sheet,
                in_stock=row.in_stock,
                pricing_rule=rule,
            )
        except ValidationError as e:
            # Ex: custo negativo em Tampas
            self.logger.debug(
                "Linha descartada",
                sheet=sheet,
                row=row.row_index,
                error=str(e)[:200],
            )
            return None

    async def ingest(
        self,
        workbook: CatalogWorkbook,
        catalog: InventoryCatalog,
        storage: Optional[BaseStorage] = None,
    ) -> IngestionResult:
        """
        Importa a planilha: constrói, persiste o snapshot e troca o catálogo.

        Com zero itens, levanta IngestionError e o catálogo fica como estava.
        A troca só acontece depois do snapshot salvo.
        """
        result = self.build(workbook)

        async with catalog.write_lock:
            if storage is not None:
                await storage.save_items(result.items)
            catalog.replace(result.items)

        return result


def items_signature(items: Iterable[InventoryItem]) -> list[tuple]:
    """
    Multiconjunto (descrição, custo, regra, estoque) ordenado.
    Ids não entram: mudam a cada importação.
    """
    return sorted(
        (i.description, i.cost, i.pricing_rule.value, i.in_stock)
        for i in items
    )
