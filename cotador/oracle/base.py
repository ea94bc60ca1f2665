"""
Contrato do oráculo de matching semântico.
Define requisição, resposta e o resultado tipado (Match | NoMatch | Failure).
"""

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config.logging_config import LoggerMixin
from cotador.core.exceptions import OracleError
from cotador.core.models import InventoryItem
from cotador.core.types import Category


DEFAULT_INSTRUCTIONS = """\
Você é um especialista em peças de celular.
Tarefa:
1. Encontre o item do estoque que melhor corresponde ao pedido do usuário.
2. Considere sinônimos (ex: "flex" = "dock", "tampa" = "carcaça").
3. Se o item exato não existir, mas houver um muito próximo, selecione-o.
4. Retorne JSON: { "matchedId": "ID_DO_ITEM" } ou { "matchedId": null }.
"""


# =============================================================================
# REQUISIÇÃO E RESPOSTA
# =============================================================================

class OracleCandidate(BaseModel):
    """Resumo mínimo de um candidato enviado ao oráculo."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    category: Category
    in_stock: bool

    @classmethod
    def from_item(cls, item: InventoryItem) -> "OracleCandidate":
        """Cria resumo a partir do item completo."""
        return cls(
            id=item.id,
            description=item.description,
            category=item.category,
            in_stock=item.in_stock,
        )

    def to_payload(self) -> dict[str, Any]:
        """Formato enviado na requisição."""
        return {
            "id": self.id,
            "description": self.description,
            "category": self.category.value,
            "inStock": self.in_stock,
        }


class OracleRequest(BaseModel):
    """Requisição ao oráculo: pedido original, candidatos e instruções."""

    query: str
    candidates: list[OracleCandidate] = Field(default_factory=list)
    instructions: str = DEFAULT_INSTRUCTIONS

    def to_payload(self) -> dict[str, Any]:
        """Corpo da requisição no formato do contrato."""
        return {
            "query": self.query,
            "candidates": [c.to_payload() for c in self.candidates],
            "instructions": self.instructions,
        }


class OracleResponse(BaseModel):
    """Única forma aceita de resposta: {"matchedId": str | null}."""

    model_config = ConfigDict(extra="forbid")

    matched_id: Optional[str] = Field(default=None, alias="matchedId")


# =============================================================================
# RESULTADOS
# =============================================================================

@dataclass(frozen=True)
class OracleMatch:
    """O oráculo escolheu um identificador."""

    matched_id: str


@dataclass(frozen=True)
class OracleNoMatch:
    """O oráculo sinalizou explicitamente que nenhum candidato serve."""


@dataclass(frozen=True)
class OracleFailure:
    """Timeout, erro de transporte ou resposta malformada."""

    kind: str
    detail: str = ""


OracleResult = Union[OracleMatch, OracleNoMatch, OracleFailure]


def parse_oracle_response(raw: Any) -> OracleResult:
    """
    Valida a resposta bruta do oráculo.

    Args:
        raw: Texto JSON ou objeto já decodificado

    Returns:
        OracleMatch, OracleNoMatch ou OracleFailure(kind="malformed")
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            return OracleFailure(kind="malformed", detail=f"JSON inválido: {e}")

    if not isinstance(raw, dict):
        return OracleFailure(kind="malformed", detail=f"Tipo inesperado: {type(raw).__name__}")

    try:
        response = OracleResponse.model_validate(raw)
    except ValidationError as e:
        return OracleFailure(kind="malformed", detail=str(e)[:200])

    if not response.matched_id:
        return OracleNoMatch()
    return OracleMatch(matched_id=response.matched_id)


# =============================================================================
# ORÁCULO BASE
# =============================================================================

class MatchOracle(ABC, LoggerMixin):
    """
    Classe base para oráculos de matching.
    Subclasses implementam apenas o transporte em `_query`.
    """

    def __init__(self, timeout: float = 30.0):
        """
        Inicializa o oráculo.

        Args:
            timeout: Tempo máximo por chamada, em segundos
        """
        self.timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Identificador do oráculo para logs."""
        pass

    @abstractmethod
    async def _query(self, request: OracleRequest) -> Any:
        """
        Executa a chamada externa.

        Returns:
            Resposta bruta (texto JSON ou dict)

        Raises:
            OracleError: Falha conhecida de transporte
        """
        pass

    async def match(
        self,
        request: OracleRequest,
        timeout: Optional[float] = None,
    ) -> OracleResult:
        """
        Consulta o oráculo sem nunca levantar exceção.

        Args:
            request: Pedido e candidatos
            timeout: Sobrescreve o timeout padrão da instância

        Returns:
            Resultado tipado da consulta
        """
        limit = self.timeout if timeout is None else timeout

        try:
            raw = await asyncio.wait_for(self._query(request), timeout=limit)
        except asyncio.TimeoutError:
            return OracleFailure(kind="timeout", detail=f"Sem resposta em {limit}s")
        except OracleError as e:
            return OracleFailure(kind=e.kind, detail=e.message)
        except Exception as e:
            self.logger.error(
                "Erro inesperado no oráculo",
                oracle=self.name,
                error=str(e),
                exc_info=True,
            )
            return OracleFailure(kind="unexpected", detail=str(e))

        return parse_oracle_response(raw)


class UnconfiguredOracle(MatchOracle):
    """Oráculo usado quando não há credenciais: toda consulta falha."""

    @property
    def name(self) -> str:
        return "unconfigured"

    async def _query(self, request: OracleRequest) -> Any:
        raise OracleError("Chave de API do oráculo não configurada", kind="unconfigured")
