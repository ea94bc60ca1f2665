"""
Módulo de configuração do sistema.
Exporta as configurações e o logging usados em todo o projeto.
"""

from config.settings import Settings, get_settings
from config.logging_config import LoggerMixin, bound_context, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "LoggerMixin",
    "bound_context",
    "get_logger",
    "setup_logging",
]
