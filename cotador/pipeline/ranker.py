"""
Pré-filtro barato de candidatos.
Reduz o catálogo aos itens com sobreposição de tokens antes do matching
semântico.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from config.logging_config import LoggerMixin
from cotador.core.constants import DEFAULT_CANDIDATE_LIMIT
from cotador.core.models import InventoryItem
from cotador.pipeline.normalizer import TextNormalizer


@dataclass(frozen=True)
class ScoredCandidate:
    """Item candidato com sua pontuação de sobreposição."""

    item: InventoryItem
    score: int


class CandidateRanker(LoggerMixin):
    """
    Ranqueador por sobreposição de tokens.

    A pontuação de um item é o número de tokens do pedido que aparecem como
    substring na descrição normalizada. Tokens repetidos no pedido contam
    mais de uma vez.
    """

    def __init__(
        self,
        limit: int = DEFAULT_CANDIDATE_LIMIT,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Inicializa o ranqueador.

        Args:
            limit: Máximo de candidatos retornados
            normalizer: Normalizador de texto (padrão: TextNormalizer)
        """
        self.limit = limit
        self.normalizer = normalizer or TextNormalizer()

    def score(
        self,
        query: str,
        inventory: Iterable[InventoryItem],
    ) -> list[ScoredCandidate]:
        """
        Pontua todos os itens com ao menos um token em comum.

        Returns:
            Candidatos em ordem decrescente de pontuação; empates mantêm a
            ordem do catálogo
        """
        tokens = self.normalizer.tokenize(query)
        if not tokens:
            return []

        scored = []
        for item in inventory:
            score = sum(1 for token in tokens if token in item.normalized_description)
            if score > 0:
                scored.append(ScoredCandidate(item=item, score=score))

        # sorted() é estável
        return sorted(scored, key=lambda c: c.score, reverse=True)

    def rank(
        self,
        query: str,
        inventory: Iterable[InventoryItem],
        limit: Optional[int] = None,
    ) -> list[InventoryItem]:
        """
        Retorna os melhores candidatos para o pedido.

        Args:
            query: Pedido em texto livre
            inventory: Itens do catálogo, na ordem do catálogo
            limit: Máximo de itens (None = limite da instância)

        Returns:
            Lista com no máximo `limit` itens; vazia se nenhum token útil
            ou nenhum item casar
        """
        max_items = self.limit if limit is None else limit
        candidates = self.score(query, inventory)[:max_items]

        self.logger.debug(
            "Candidatos ranqueados",
            query=query[:50],
            candidates=len(candidates),
            top_score=candidates[0].score if candidates else 0,
        )

        return [c.item for c in candidates]
