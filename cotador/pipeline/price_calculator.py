"""
Calculador de preço final de venda.
Aplica o multiplicador da regra de precificação e arredonda para cima em
múltiplos de R$ 5.
"""

from decimal import Decimal, ROUND_CEILING

from config.logging_config import LoggerMixin
from cotador.core.constants import PRICE_MULTIPLIERS, PRICE_ROUNDING_STEP
from cotador.core.models import InventoryItem, format_brl
from cotador.core.types import PricingRule


class PriceCalculator(LoggerMixin):
    """
    Calculador de preço de venda.
    Função pura: mesmo custo e regra sempre dão o mesmo preço.
    """

    def __init__(self, rounding_step: Decimal = PRICE_ROUNDING_STEP):
        """
        Inicializa o calculador.

        Args:
            rounding_step: Múltiplo para o arredondamento para cima
        """
        self.rounding_step = Decimal(rounding_step)

    def calculate_price(
        self,
        cost: Decimal | float | int,
        rule: PricingRule,
    ) -> Decimal:
        """
        Calcula preço final.

        Args:
            cost: Custo base do item
            rule: Regra de precificação (standard x2, fallback x3.5)

        Returns:
            Preço arredondado para cima até o próximo múltiplo de 5

        Examples:
            (10, standard) -> 20
            (6.85, standard) -> 15 (13.70 -> 15)
            (6.85, fallback) -> 25 (23.975 -> 25)
        """
        multiplier = PRICE_MULTIPLIERS[PricingRule(rule)]

        # str() evita carregar o erro binário do float para o Decimal
        raw_price = Decimal(str(cost)) * multiplier

        steps = (raw_price / self.rounding_step).to_integral_value(rounding=ROUND_CEILING)
        return steps * self.rounding_step

    def price_item(self, item: InventoryItem) -> Decimal:
        """Calcula preço final de um item de estoque."""
        return self.calculate_price(item.cost, item.pricing_rule)

    def format_price(self, price: Decimal | float | int) -> str:
        """
        Formata preço para exibição.

        Returns:
            String formatada (ex: "R$ 1.234,56")
        """
        return format_brl(price)


_default_calculator = PriceCalculator()


def calculate_price(cost: Decimal | float | int, rule: PricingRule) -> Decimal:
    """Atalho para PriceCalculator().calculate_price."""
    return _default_calculator.calculate_price(cost, rule)
