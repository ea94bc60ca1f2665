"""
Parser de valores monetários vindos da planilha.
Converte strings no formato brasileiro (ou números já prontos) em custo numérico.
"""

import math
import numbers
import re
from decimal import Decimal
from typing import Any

from config.logging_config import LoggerMixin
from cotador.core.constants import CURRENCY_SYMBOL_PATTERN

# Prefixo numérico aceito após a troca de separadores (ex: "1234.56", "12abc" -> 12)
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CurrencyParser(LoggerMixin):
    """
    Parser de moeda tolerante a falhas.
    Nunca levanta exceção: entradas inválidas viram 0.
    """

    def parse(self, value: Any) -> float | int | Decimal:
        """
        Converte valor monetário em número.

        Números finitos são devolvidos sem alteração. Textos têm o símbolo
        monetário removido e são lidos assumindo "." como separador de milhar
        e "," como separador decimal.

        Args:
            value: Célula da planilha (str, número ou vazio)

        Returns:
            Valor numérico, ou 0 se não for possível interpretar

        Examples:
            "R$ 6,85" -> 6.85
            "1.234,56" -> 1234.56
            "6.85" -> 685.0 (ponto é sempre milhar)
        """
        if isinstance(value, bool):
            return 0

        if isinstance(value, (numbers.Real, Decimal)):
            try:
                return value if math.isfinite(value) else 0
            except (TypeError, ValueError, OverflowError):
                return 0

        if not isinstance(value, str):
            return 0

        return self._parse_text(value)

    def _parse_text(self, text: str) -> float:
        """Interpreta texto no formato 1.234,56."""
        cleaned = CURRENCY_SYMBOL_PATTERN.sub("", text).strip()
        cleaned = self._normalize_price_format(cleaned)

        match = _NUMBER_PREFIX.match(cleaned)
        if not match:
            self.logger.debug("Valor monetário ignorado", raw=text[:50])
            return 0

        try:
            result = float(match.group(0))
        except ValueError:
            return 0

        return result if math.isfinite(result) else 0

    def _normalize_price_format(self, price_str: str) -> str:
        """
        Normaliza formato de preço brasileiro para padrão decimal.

        Exemplos:
            "1.234,56" -> "1234.56"
            "12,99" -> "12.99"
            "12.99" -> "1299"
        """
        return price_str.replace(".", "").replace(",", ".")


_default_parser = CurrencyParser()


def parse_currency(value: Any) -> float | int | Decimal:
    """Atalho para CurrencyParser().parse."""
    return _default_parser.parse(value)
