"""
Testes unitários para os modelos de dados.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cotador.core.models import (
    CatalogRow,
    InventoryItem,
    QuoteBatchResult,
    QuoteRequest,
    format_brl,
)
from cotador.core.types import Category, QuoteStatus


class TestFormatBrl:
    """Testes para format_brl."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("20"), "R$ 20,00"),
            (1234.56, "R$ 1.234,56"),
            (Decimal("1000000"), "R$ 1.000.000,00"),
            (0, "R$ 0,00"),
        ],
    )
    def test_formato(self, value, expected):
        """Testa separadores brasileiros."""
        assert format_brl(value) == expected


class TestCatalogRow:
    """Testes para CatalogRow."""

    def test_nan_vira_none(self):
        """Testa célula NaN vinda do pandas."""
        row = CatalogRow(row_index=0, status=float("nan"), description=float("nan"))

        assert row.status is None
        assert row.description is None
        assert not row.has_description

    def test_numero_vira_texto(self):
        """Testa descrição numérica."""
        row = CatalogRow(row_index=0, description=123)

        assert row.description == "123"
        assert row.has_description


class TestInventoryItem:
    """Testes para InventoryItem."""

    def test_imutavel(self, item_flex_biometria):
        """Testa que o item não pode ser alterado."""
        with pytest.raises(ValidationError):
            item_flex_biometria.cost = 99

    def test_descricao_vazia_invalida(self):
        """Testa que descrição só com espaços é rejeitada."""
        with pytest.raises(ValidationError):
            InventoryItem(
                id="X",
                description="   ",
                normalized_description="",
                cost=1,
                category=Category.COVER,
                source_sheet="Tampas",
            )

    def test_custo_negativo_invalido(self):
        """Testa que custo negativo é rejeitado."""
        with pytest.raises(ValidationError):
            InventoryItem(
                id="X",
                description="Tampa",
                normalized_description="tampa",
                cost=-1,
                category=Category.COVER,
                source_sheet="Tampas",
            )

    def test_format_cost(self, item_tampa_a11):
        """Testa formatação do custo."""
        assert item_tampa_a11.format_cost() == "R$ 12,50"


class TestQuoteRequest:
    """Testes para QuoteRequest."""

    def test_estado_inicial(self):
        """Testa linha recém-criada."""
        request = QuoteRequest(original_text="flex a11")

        assert request.status == QuoteStatus.PENDING
        assert request.matched_item is None
        assert request.final_price is None
        assert not request.counts_toward_total

    def test_fluxo_completed(self, item_flex_biometria):
        """Testa pending -> processing -> completed."""
        request = QuoteRequest(original_text="flex a11")
        request.mark_processing()
        request.complete(item_flex_biometria, Decimal("20"))

        assert request.status == QuoteStatus.COMPLETED
        assert request.matched_item == item_flex_biometria
        assert request.final_price == Decimal("20")
        assert request.counts_toward_total
        assert request.format_final_price() == "R$ 20,00"

    def test_fluxo_not_found(self):
        """Testa pending -> processing -> not_found."""
        request = QuoteRequest(original_text="flex a11")
        request.mark_processing()
        request.mark_not_found()

        assert request.status == QuoteStatus.NOT_FOUND
        assert request.format_final_price() == "-"

    def test_status_final_nao_muda(self, item_flex_biometria):
        """Testa que linha finalizada não pode ser alterada."""
        request = QuoteRequest(original_text="flex a11")
        request.mark_not_found()

        with pytest.raises(ValueError):
            request.complete(item_flex_biometria, Decimal("20"))
        with pytest.raises(ValueError):
            request.mark_processing()

    def test_sem_estoque_nao_conta_no_total(self, item_tampa_j7_sem_estoque):
        """Testa que item sem estoque mantém preço mas fica fora do total."""
        request = QuoteRequest(original_text="tampa j7")
        request.complete(item_tampa_j7_sem_estoque, Decimal("20"))

        assert request.final_price == Decimal("20")
        assert not request.counts_toward_total

    def test_item_sem_completed_invalido(self, item_flex_biometria):
        """Testa que matched_item exige status completed."""
        with pytest.raises(ValidationError):
            QuoteRequest(
                original_text="flex a11",
                status=QuoteStatus.NOT_FOUND,
                matched_item=item_flex_biometria,
                final_price=Decimal("20"),
            )

    def test_preco_sem_item_invalido(self):
        """Testa que final_price exige matched_item."""
        with pytest.raises(ValidationError):
            QuoteRequest(original_text="flex a11", final_price=Decimal("20"))


class TestQuoteBatchResult:
    """Testes para QuoteBatchResult."""

    def test_contagens(self, item_flex_biometria):
        """Testa contagem de encontrados e não encontrados."""
        found = QuoteRequest(original_text="flex a11")
        found.complete(item_flex_biometria, Decimal("20"))
        missing = QuoteRequest(original_text="bateria")
        missing.mark_not_found()

        result = QuoteBatchResult(requests=[found, missing], total=Decimal("20"))

        assert result.completed == 1
        assert result.not_found == 1
        assert result.format_total() == "R$ 20,00"

    def test_serializacao_json(self, item_flex_biometria):
        """Testa dump em modo JSON (usado pela CLI)."""
        found = QuoteRequest(original_text="flex a11")
        found.complete(item_flex_biometria, Decimal("20"))

        data = QuoteBatchResult(requests=[found], total=Decimal("20")).model_dump(mode="json")

        assert data["completed"] == 1
        assert data["requests"][0]["status"] == "completed"
        assert data["requests"][0]["matched_item"]["id"] == item_flex_biometria.id
