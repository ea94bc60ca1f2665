"""
Módulo de pipeline: normalização, parsing, precificação e matching.
"""

from cotador.pipeline.normalizer import TextNormalizer, normalize_text
from cotador.pipeline.parser import CurrencyParser, parse_currency
from cotador.pipeline.price_calculator import PriceCalculator, calculate_price
from cotador.pipeline.ranker import CandidateRanker, ScoredCandidate
from cotador.pipeline.resolver import MatchResolver
from cotador.pipeline.batch import QuoteBatchProcessor

__all__ = [
    "TextNormalizer",
    "normalize_text",
    "CurrencyParser",
    "parse_currency",
    "PriceCalculator",
    "calculate_price",
    "CandidateRanker",
    "ScoredCandidate",
    "MatchResolver",
    "QuoteBatchProcessor",
]
