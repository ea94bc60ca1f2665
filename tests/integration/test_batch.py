"""
Testes de integração para o QuoteBatchProcessor.
"""

from decimal import Decimal

import pytest

from cotador.core.types import QuoteStatus
from cotador.pipeline import MatchResolver, QuoteBatchProcessor
from fixtures.oracle import FakeOracle


def make_processor(oracle: FakeOracle, **kwargs) -> QuoteBatchProcessor:
    """Processador com resolvedor sobre o oráculo informado."""
    timeout = kwargs.pop("timeout", None)
    return QuoteBatchProcessor(MatchResolver(oracle, timeout=timeout), **kwargs)


CHOICES = {
    "flex a11": "biometria",
    "tampa j7": "tampa j7",
    "tampa a11": "tampa a11",
    "flex dock j7": "dock",
}


class TestQuoteBatchProcessor:
    """Testes de integração para QuoteBatchProcessor."""

    # TESTES: filtragem de linhas

    class TestSplitLines:
        """Testes para split_lines."""

        @pytest.fixture
        def processor(self) -> QuoteBatchProcessor:
            """Processador sem chamadas reais."""
            return make_processor(FakeOracle())

        def test_descarta_cumprimentos(self, processor):
            """Testa stoplist insensível a caixa e acento."""
            text = "Bom dia\nOLÁ\n  boa noite  \nflex a11"

            assert processor.split_lines(text) == ["flex a11"]

        def test_descarta_linhas_curtas(self, processor):
            """Testa linhas com até 3 caracteres normalizados."""
            text = "ok\n\n   \nabc\nabcd"

            assert processor.split_lines(text) == ["abcd"]

        def test_preserva_texto_original(self, processor):
            """Testa que a linha não é normalizada na saída."""
            assert processor.split_lines("  Flex Á11  ") == ["  Flex Á11  "]

        def test_quebras_de_linha_windows(self, processor):
            """Testa pedido com \\r\\n."""
            assert processor.split_lines("flex a11\r\ntampa j7") == ["flex a11", "tampa j7"]

        def test_texto_vazio(self, processor):
            """Testa pedido vazio."""
            assert processor.split_lines("") == []

    # TESTES: process_batch

    @pytest.mark.asyncio
    async def test_ordem_e_cumprimento(self, inventory):
        """Testa "bom dia\\nflex a11\\ntampa j7": 2 linhas, na ordem."""
        processor = make_processor(FakeOracle.choosing(CHOICES))

        result = await processor.process_batch("bom dia\nflex a11\ntampa j7", inventory)

        assert [r.original_text for r in result.requests] == ["flex a11", "tampa j7"]

    @pytest.mark.asyncio
    async def test_ordem_independe_da_conclusao(self, inventory):
        """Testa que a primeira linha lenta continua primeira."""
        oracle = FakeOracle.choosing(
            CHOICES,
            delays={"flex a11": 0.2, "tampa a11": 0.1},
        )
        processor = make_processor(oracle)

        result = await processor.process_batch("flex a11\ntampa a11\nflex dock j7", inventory)

        assert [r.original_text for r in result.requests] == [
            "flex a11",
            "tampa a11",
            "flex dock j7",
        ]
        assert all(r.status == QuoteStatus.COMPLETED for r in result.requests)

    @pytest.mark.asyncio
    async def test_total_exclui_sem_estoque(self, inventory, item_tampa_j7_sem_estoque):
        """Testa que item sem estoque tem preço mas fica fora do total."""
        processor = make_processor(FakeOracle.choosing(CHOICES))

        result = await processor.process_batch("flex a11\ntampa j7", inventory)

        flex, tampa = result.requests
        assert flex.final_price == 20
        assert tampa.matched_item == item_tampa_j7_sem_estoque
        assert tampa.final_price == 20
        assert result.total == Decimal("20")

    @pytest.mark.asyncio
    async def test_precos_por_regra(self, inventory):
        """Testa standard (tampa 12,50 -> 25) e fallback (6,85 -> 25)."""
        processor = make_processor(FakeOracle.choosing(CHOICES))

        result = await processor.process_batch("tampa a11\nflex dock j7", inventory)

        assert [r.final_price for r in result.requests] == [25, 25]
        assert result.total == 50

    @pytest.mark.asyncio
    async def test_linha_nao_encontrada(self, inventory):
        """Testa linha sem correspondência."""
        processor = make_processor(FakeOracle.choosing(CHOICES))

        result = await processor.process_batch("flex a11\nbateria iphone 11", inventory)

        assert result.requests[1].status == QuoteStatus.NOT_FOUND
        assert result.requests[1].final_price is None
        assert result.completed == 1
        assert result.not_found == 1
        assert result.total == 20

    @pytest.mark.asyncio
    async def test_timeout_afeta_so_a_linha(self, inventory):
        """Testa que uma linha lenta não bloqueia as demais."""
        oracle = FakeOracle.choosing(CHOICES, delays={"tampa a11": 1.0})
        processor = make_processor(oracle, timeout=0.1)

        result = await processor.process_batch("flex a11\ntampa a11", inventory)

        assert result.requests[0].status == QuoteStatus.COMPLETED
        assert result.requests[1].status == QuoteStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_erro_no_resolvedor_vira_not_found(self, inventory):
        """Testa que exceção inesperada não aborta o lote."""

        class _BrokenResolver(MatchResolver):
            async def resolve(self, query, inventory):
                if query == "tampa a11":
                    raise RuntimeError("boom")
                return await super().resolve(query, inventory)

        processor = QuoteBatchProcessor(_BrokenResolver(FakeOracle.choosing(CHOICES)))

        result = await processor.process_batch("flex a11\ntampa a11", inventory)

        assert [r.status for r in result.requests] == [
            QuoteStatus.COMPLETED,
            QuoteStatus.NOT_FOUND,
        ]

    @pytest.mark.asyncio
    async def test_limite_de_concorrencia(self, inventory):
        """Testa que no máximo max_concurrency linhas consultam ao mesmo tempo."""
        lines = [f"flex a11 pedido {i}" for i in range(10)]
        oracle = FakeOracle(delays={line: 0.02 for line in lines})
        processor = make_processor(oracle, max_concurrency=3)

        result = await processor.process_batch("\n".join(lines), inventory)

        assert len(result.requests) == 10
        assert oracle.call_count == 10
        assert oracle.max_in_flight <= 3

    @pytest.mark.asyncio
    async def test_lote_vazio(self, inventory):
        """Testa pedido só com ruído."""
        oracle = FakeOracle()
        processor = make_processor(oracle)

        result = await processor.process_batch("bom dia\nok", inventory)

        assert result.requests == []
        assert result.total == 0
        assert oracle.call_count == 0

    @pytest.mark.asyncio
    async def test_geracao_do_catalogo(self, catalog):
        """Testa que o resultado registra a geração do snapshot usado."""
        processor = make_processor(FakeOracle())

        result = await processor.process_batch("flex a11", catalog.current)

        assert result.catalog_generation == catalog.generation

    def test_calculate_total(self, item_flex_biometria, item_tampa_j7_sem_estoque):
        """Testa soma apenas de linhas completas e em estoque."""
        from cotador.core.models import QuoteRequest

        ok = QuoteRequest(original_text="a")
        ok.complete(item_flex_biometria, Decimal("20"))
        out = QuoteRequest(original_text="b")
        out.complete(item_tampa_j7_sem_estoque, Decimal("20"))
        missing = QuoteRequest(original_text="c")
        missing.mark_not_found()

        assert QuoteBatchProcessor.calculate_total([ok, out, missing]) == Decimal("20")
