"""
Processador de lotes de cotação.
Quebra o pedido em linhas, descarta ruído, resolve cada linha em paralelo e
soma o total disponível.
"""

import asyncio
from decimal import Decimal
from typing import Iterable, Optional

from config.logging_config import LoggerMixin
from cotador.catalog.inventory import Inventory
from cotador.core.constants import GREETING_STOPLIST
from cotador.core.models import QuoteBatchResult, QuoteRequest
from cotador.pipeline.normalizer import TextNormalizer
from cotador.pipeline.price_calculator import PriceCalculator
from cotador.pipeline.resolver import MatchResolver


class QuoteBatchProcessor(LoggerMixin):
    """
    Processador de pedidos com várias linhas.

    As linhas são resolvidas de forma concorrente (até `max_concurrency`
    chamadas simultâneas); a saída mantém a ordem das linhas de entrada.
    """

    def __init__(
        self,
        resolver: MatchResolver,
        calculator: Optional[PriceCalculator] = None,
        max_concurrency: int = 8,
        min_line_length: int = 3,
        stoplist: Iterable[str] = GREETING_STOPLIST,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Inicializa o processador.

        Args:
            resolver: Resolvedor de linhas
            calculator: Calculador de preço final
            max_concurrency: Máximo de linhas resolvidas ao mesmo tempo
            min_line_length: Linhas normalizadas com tamanho <= este valor são ignoradas
            stoplist: Cumprimentos/despedidas ignorados (comparados normalizados)
            normalizer: Normalizador de texto
        """
        self.resolver = resolver
        self.calculator = calculator or PriceCalculator()
        self.max_concurrency = max_concurrency
        self.min_line_length = min_line_length
        self.normalizer = normalizer or TextNormalizer()
        self.stoplist = frozenset(self.normalizer.normalize(s) for s in stoplist)

    def is_noise(self, line: str) -> bool:
        """Linha curta demais ou cumprimento."""
        normalized = self.normalizer.normalize(line)
        return len(normalized) <= self.min_line_length or normalized in self.stoplist

    def split_lines(self, text: str) -> list[str]:
        """Quebra o pedido em linhas úteis, preservando o texto original."""
        if not text:
            return []
        return [line for line in text.splitlines() if not self.is_noise(line)]

    async def process_line(
        self,
        line: str,
        inventory: Inventory,
        semaphore: Optional[asyncio.Semaphore] = None,
    ) -> QuoteRequest:
        """
        Resolve e precifica uma linha.

        Returns:
            QuoteRequest com status completed ou not_found
        """
        request = QuoteRequest(original_text=line)
        request.mark_processing()

        try:
            if semaphore is None:
                item = await self.resolver.resolve(line, inventory)
            else:
                async with semaphore:
                    item = await self.resolver.resolve(line, inventory)
        except Exception as e:
            self.logger.error(
                "Erro ao resolver linha",
                line=line[:50],
                error=str(e),
            )
            item = None

        if item is None:
            request.mark_not_found()
        else:
            request.complete(item, self.calculator.price_item(item))

        return request

    async def process_batch(
        self,
        text: str,
        inventory: Inventory,
    ) -> QuoteBatchResult:
        """
        Processa um pedido completo.

        Args:
            text: Pedido com uma peça por linha
            inventory: Snapshot do catálogo (somente leitura)

        Returns:
            QuoteBatchResult com linhas na ordem de entrada e total em estoque
        """
        lines = self.split_lines(text)

        self.logger.info(
            "Processando lote de cotação",
            lines=len(lines),
            inventory=len(inventory),
            generation=inventory.generation,
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)

        # gather devolve na ordem das corrotinas, não na ordem de conclusão
        requests = await asyncio.gather(
            *(self.process_line(line, inventory, semaphore) for line in lines)
        )

        total = self.calculate_total(requests)
        result = QuoteBatchResult(
            requests=list(requests),
            total=total,
            catalog_generation=inventory.generation,
        )

        self.logger.info(
            "Lote processado",
            lines=len(lines),
            completed=result.completed,
            not_found=result.not_found,
            total=str(total),
        )

        return result

    @staticmethod
    def calculate_total(requests: Iterable[QuoteRequest]) -> Decimal:
        """Soma os preços finais das linhas encontradas e em estoque."""
        return sum(
            (r.final_price for r in requests if r.counts_toward_total),
            Decimal("0"),
        )
