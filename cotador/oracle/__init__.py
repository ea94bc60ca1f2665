"""
Módulo do oráculo: contrato de matching semântico e adaptadores.
"""

from typing import Optional

from config.settings import Settings, get_settings
from cotador.oracle.base import (
    DEFAULT_INSTRUCTIONS,
    MatchOracle,
    OracleCandidate,
    OracleFailure,
    OracleMatch,
    OracleNoMatch,
    OracleRequest,
    OracleResponse,
    OracleResult,
    UnconfiguredOracle,
    parse_oracle_response,
)


def create_oracle(settings: Optional[Settings] = None) -> MatchOracle:
    """
    Cria o oráculo conforme as configurações.
    Sem chave de API, retorna um oráculo que sempre falha.
    """
    settings = settings or get_settings()

    if not settings.has_oracle_credentials:
        return UnconfiguredOracle(timeout=settings.oracle_timeout)

    # Import tardio: o SDK só é carregado quando há credenciais
    from cotador.oracle.gemini import GeminiOracle

    return GeminiOracle(
        api_key=settings.gemini_api_key,
        model_name=settings.gemini_model,
        timeout=settings.oracle_timeout,
    )


__all__ = [
    "DEFAULT_INSTRUCTIONS",
    "MatchOracle",
    "OracleCandidate",
    "OracleFailure",
    "OracleMatch",
    "OracleNoMatch",
    "OracleRequest",
    "OracleResponse",
    "OracleResult",
    "UnconfiguredOracle",
    "create_oracle",
    "parse_oracle_response",
]
