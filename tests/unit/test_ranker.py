"""
Testes unitários para o Ranqueador de candidatos.
"""

import pytest

from cotador.core.types import Category
from cotador.pipeline.ranker import CandidateRanker
from fixtures.catalog_rows import make_item


class TestCandidateRanker:
    """Testes para CandidateRanker."""

    @pytest.fixture
    def ranker(self) -> CandidateRanker:
        """Instância do ranqueador."""
        return CandidateRanker()

    def test_mais_tokens_ranqueia_acima(self, ranker):
        """Testa "flex a11": 2 tokens casam contra 1."""
        flex = make_item("Flex Biometria A11 Preto")
        tampa = make_item("Tampa A11 Vermelha", category=Category.COVER)

        result = ranker.rank("flex a11", [tampa, flex])

        assert result == [flex, tampa]

    def test_empate_mantem_ordem_do_catalogo(self, ranker):
        """Testa ordenação estável em empates."""
        items = [
            make_item("Tampa A11 Vermelha"),
            make_item("Tampa J7 Dourada"),
            make_item("Tampa S20 Azul"),
        ]

        result = ranker.rank("tampa", items)

        assert result == items

    def test_tokens_repetidos_contam_em_dobro(self, ranker):
        """Testa que "tampa tampa a11" favorece o item com "tampa"."""
        flex = make_item("Flex A11 Preto")
        tampa = make_item("Tampa J7 Dourada")

        scored = ranker.score("tampa tampa a11", [flex, tampa])

        assert [c.item for c in scored] == [tampa, flex]
        assert [c.score for c in scored] == [2, 1]

    def test_substring_e_acentos(self, ranker):
        """Testa casamento por substring após normalização."""
        item = make_item("Flex Biometria A115")

        assert ranker.rank("BIOMETRÍA", [item]) == [item]

    def test_item_sem_token_nao_e_candidato(self, ranker):
        """Testa que itens sem sobreposição ficam de fora."""
        item = make_item("Conector de Carga")

        assert ranker.rank("flex a11", [item]) == []

    def test_pedido_sem_tokens_uteis(self, ranker):
        """Testa pedido só com tokens curtos."""
        item = make_item("Flex A11")

        assert ranker.rank("a1 j7", [item]) == []

    def test_catalogo_vazio(self, ranker):
        """Testa catálogo vazio."""
        assert ranker.rank("flex a11", []) == []

    def test_limite(self):
        """Testa que no máximo `limit` itens são retornados."""
        items = [make_item(f"Flex Modelo {i}") for i in range(60)]

        assert len(CandidateRanker(limit=40).rank("flex", items)) == 40
        assert len(CandidateRanker(limit=40).rank("flex", items, limit=5)) == 5

    def test_usa_inventory(self, ranker, inventory, item_flex_biometria):
        """Testa ranqueamento sobre o snapshot do catálogo."""
        result = ranker.rank("flex biometria", inventory)

        assert result[0] == item_flex_biometria
