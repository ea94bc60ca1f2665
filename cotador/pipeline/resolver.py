"""
Resolvedor de pedidos.
Fluxo: pedido -> candidatos (ranker) -> oráculo -> item do estoque.
"""

from typing import Optional

from config.logging_config import LoggerMixin
from cotador.catalog.inventory import Inventory
from cotador.core.models import InventoryItem
from cotador.oracle.base import (
    DEFAULT_INSTRUCTIONS,
    MatchOracle,
    OracleCandidate,
    OracleFailure,
    OracleMatch,
    OracleRequest,
)
from cotador.pipeline.ranker import CandidateRanker


class MatchResolver(LoggerMixin):
    """
    Resolve um pedido em texto livre para um item do estoque.

    Falha de forma segura: sem candidatos, falha do oráculo, resposta
    malformada ou id inexistente resultam em None. Não há retry.
    """

    def __init__(
        self,
        oracle: MatchOracle,
        ranker: Optional[CandidateRanker] = None,
        timeout: Optional[float] = None,
        instructions: str = DEFAULT_INSTRUCTIONS,
    ):
        """
        Inicializa o resolvedor.

        Args:
            oracle: Oráculo de matching semântico
            ranker: Pré-filtro de candidatos
            timeout: Timeout por chamada (None = padrão do oráculo)
            instructions: Instruções enviadas ao oráculo
        """
        self.oracle = oracle
        self.ranker = ranker or CandidateRanker()
        self.timeout = timeout
        self.instructions = instructions

    async def resolve(
        self,
        query: str,
        inventory: Inventory,
    ) -> Optional[InventoryItem]:
        """
        Encontra o item que melhor atende ao pedido.

        Args:
            query: Linha do pedido, como digitada
            inventory: Snapshot do catálogo

        Returns:
            Item encontrado ou None
        """
        candidates = self.ranker.rank(query, inventory)

        if not candidates:
            self.logger.debug("Nenhum candidato; oráculo não consultado", query=query[:50])
            return None

        request = OracleRequest(
            query=query,
            candidates=[OracleCandidate.from_item(item) for item in candidates],
            instructions=self.instructions,
        )

        result = await self.oracle.match(request, timeout=self.timeout)

        if isinstance(result, OracleFailure):
            self.logger.warning(
                "Falha no oráculo; linha sem correspondência",
                oracle=self.oracle.name,
                query=query[:50],
                kind=result.kind,
                detail=result.detail[:200],
            )
            return None

        if not isinstance(result, OracleMatch):
            return None

        item = inventory.get(result.matched_id)
        if item is None:
            self.logger.warning(
                "Oráculo retornou id inexistente",
                oracle=self.oracle.name,
                query=query[:50],
                matched_id=result.matched_id,
            )
            return None

        self.logger.debug(
            "Pedido resolvido",
            query=query[:50],
            item_id=item.id,
            description=item.description[:50],
        )
        return item
