"""
Normalizador de texto.
Canoniza pedidos e descrições para comparação: minúsculas, sem acentos, sem
espaços nas pontas.
"""

import re
import unicodedata
from typing import Optional

from cotador.core.constants import MIN_TOKEN_LENGTH

# Marcas diacríticas combinantes (após decomposição NFD)
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


class TextNormalizer:
    """
    Normalizador determinístico de texto.
    Sem parâmetro de locale: a mesma tabela de remoção vale para tudo.
    """

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """
        Normaliza texto para comparação.

        Args:
            text: Texto livre (None é aceito)

        Returns:
            Texto em minúsculas, sem acentos e sem espaços nas pontas

        Examples:
            "Tampa Preta Á" -> "tampa preta a"
        """
        if not text:
            return ""

        decomposed = unicodedata.normalize("NFD", str(text).lower())
        return _COMBINING_MARKS.sub("", decomposed).strip()

    def tokenize(
        self,
        text: Optional[str],
        min_length: int = MIN_TOKEN_LENGTH,
    ) -> list[str]:
        """
        Quebra o texto normalizado em tokens úteis para busca.

        Tokens com tamanho <= min_length são descartados. Repetições são
        mantidas.
        """
        return [
            token
            for token in self.normalize(text).split()
            if len(token) > min_length
        ]


def normalize_text(text: Optional[str]) -> str:
    """Atalho para TextNormalizer.normalize."""
    return TextNormalizer.normalize(text)
