"""
Hierarquia de exceções do sistema.
Todas as exceções herdam de CotadorError para facilitar tratamento.
"""

from typing import Any, Optional


class CotadorError(Exception):
    """
    Exceção base do sistema.
    Todas as exceções customizadas herdam desta classe.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Serializa exceção para dicionário."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


# EXCEÇÕES DE IMPORTAÇÃO

class IngestionError(CotadorError):
    """Importação não produziu nenhum item válido."""

    def __init__(
        self,
        message: str = "Nenhum item válido encontrado. Verifique as abas e colunas.",
        *,
        source: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if source:
            details["source"] = source
        super().__init__(message, details=details, **kwargs)
        self.source = source


class WorkbookError(IngestionError):
    """Planilha ilegível ou sem as abas esperadas."""
    pass


# EXCEÇÕES DO ORÁCULO

class OracleError(CotadorError):
    """
    Falha ao consultar o oráculo semântico.
    Usada apenas dentro dos adaptadores; nunca chega ao resolver.
    """

    def __init__(
        self,
        message: str = "Falha na consulta ao oráculo",
        *,
        kind: str = "transport",
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["kind"] = kind
        super().__init__(message, details=details, **kwargs)
        self.kind = kind


# EXCEÇÕES DE STORAGE

class StorageError(CotadorError):
    """Erro de persistência do snapshot do catálogo."""

    def __init__(
        self,
        message: str,
        *,
        storage_type: Optional[str] = None,
        path: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if storage_type:
            details["storage_type"] = storage_type
        if path:
            details["path"] = path
        super().__init__(message, details=details, **kwargs)


class SnapshotCorruptedError(StorageError):
    """Snapshot existe mas não pode ser lido."""
    pass


# EXCEÇÕES DE CONCORRÊNCIA

class StaleCatalogError(CotadorError):
    """Lote concluído após o catálogo ter sido substituído ou limpo."""

    def __init__(
        self,
        message: str = "Catálogo alterado durante a cotação; resultado descartado",
        *,
        expected_generation: Optional[int] = None,
        current_generation: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if expected_generation is not None:
            details["expected_generation"] = expected_generation
        if current_generation is not None:
            details["current_generation"] = current_generation
        super().__init__(message, details=details, **kwargs)
        self.expected_generation = expected_generation
        self.current_generation = current_generation
