"""
Oráculo de matching usando Google Gemini.
"""

import json
from typing import Any

import google.api_core.exceptions as google_exceptions
import google.generativeai as genai

from cotador.core.exceptions import OracleError
from cotador.oracle.base import MatchOracle, OracleRequest


class GeminiOracle(MatchOracle):
    """
    Oráculo que pede ao Gemini o melhor candidato em JSON.
    Sem memória entre chamadas: cada pedido leva seus próprios candidatos.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        timeout: float = 30.0,
    ):
        """
        Inicializa o cliente.

        Args:
            api_key: Chave da API Google AI
            model_name: Modelo Gemini
            timeout: Tempo máximo por chamada, em segundos
        """
        super().__init__(timeout=timeout)
        self.model_name = model_name

        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(
            model_name,
            generation_config={"response_mime_type": "application/json"},
        )

    @property
    def name(self) -> str:
        return f"gemini:{self.model_name}"

    def build_prompt(self, request: OracleRequest) -> str:
        """Monta o prompt com pedido, candidatos e instruções."""
        candidates = json.dumps(
            [c.to_payload() for c in request.candidates],
            ensure_ascii=False,
        )
        return (
            f'Usuário pede: "{request.query}"\n\n'
            f"Estoque disponível (Top candidatos):\n{candidates}\n\n"
            f"{request.instructions}"
        )

    async def _query(self, request: OracleRequest) -> Any:
        prompt = self.build_prompt(request)

        try:
            response = await self._model.generate_content_async(prompt)
        except google_exceptions.ResourceExhausted as e:
            raise OracleError("Cota do Gemini excedida", kind="quota", cause=e)
        except google_exceptions.GoogleAPIError as e:
            raise OracleError("Erro na API do Gemini", kind="transport", cause=e)

        if not response.parts:
            finish_reason = (
                response.candidates[0].finish_reason.name
                if response.candidates
                else "N/A"
            )
            raise OracleError(
                f"Geração retornou vazia ({finish_reason})",
                kind="empty",
            )

        return response.text
