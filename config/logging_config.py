"""
Configuração de logging estruturado usando structlog.

Os eventos passam pelo logging padrão do Python, então o mesmo registro vai
para o stderr (nunca para o stdout, reservado à saída da CLI) e para o
arquivo cotador.log.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import structlog
from structlog.typing import Processor

LOG_FILENAME = "cotador.log"

# SDKs que logam demais em INFO/DEBUG
_NOISY_LOGGERS = ("google", "grpc", "urllib3", "aiosqlite", "asyncio")


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    json_format: bool = False,
) -> structlog.BoundLogger:
    """
    Configura o sistema de logging.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)
        log_path: Diretório do arquivo cotador.log (None = só stderr)
        json_format: Se True, uma linha JSON por evento (produção)

    Returns:
        Logger configurado
    """
    log_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        # Cores só em terminal: o mesmo texto também vai para o arquivo
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty() and log_path is None,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    root = logging.getLogger()
    root.setLevel(log_level)

    if log_path:
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = (log_path / LOG_FILENAME).resolve()

        already_attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == log_file
            for h in root.handlers
        )
        if not already_attached:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    return structlog.get_logger()


def get_logger(name: str = "cotador", **context) -> structlog.BoundLogger:
    """
    Retorna um logger com contexto.

    Args:
        name: Nome do logger
        **context: Contexto adicional para bind

    Returns:
        Logger com contexto
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


@contextmanager
def bound_context(**context) -> Iterator[None]:
    """
    Adiciona contexto a todos os eventos emitidos dentro do bloco,
    inclusive em tarefas asyncio criadas nele.

    Ex: with bound_context(batch_generation=3): ...
    """
    with structlog.contextvars.bound_contextvars(**context):
        yield


class LoggerMixin:
    """Mixin para adicionar logging a classes."""

    @property
    def logger(self) -> structlog.BoundLogger:
        """Retorna logger com nome da classe."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_operation(
        self,
        operation: str,
        **kwargs,
    ) -> structlog.BoundLogger:
        """Retorna logger com operação bindada."""
        return self.logger.bind(operation=operation, **kwargs)
