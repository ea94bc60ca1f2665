"""
Leitor da planilha de estoque (.xlsx).
Decodifica as abas Componentes e Tampas em linhas posicionais usando pandas.
"""

from pathlib import Path
from typing import Any, Optional

import pandas as pd

from config.logging_config import LoggerMixin
from cotador.core.constants import (
    COMPONENT_COLUMNS,
    COMPONENTS_SHEET,
    COVER_COLUMNS,
    COVERS_SHEET,
)
from cotador.core.exceptions import WorkbookError
from cotador.core.models import CatalogWorkbook, ComponentRow, CoverRow


class WorkbookReader(LoggerMixin):
    """
    Leitor da planilha de estoque.

    A primeira linha de cada aba é cabeçalho e é ignorada. As colunas são
    lidas por posição (A, B, C, D), não pelo nome do cabeçalho.
    """

    def __init__(
        self,
        components_sheet: str = COMPONENTS_SHEET,
        covers_sheet: str = COVERS_SHEET,
    ):
        self.components_sheet = components_sheet
        self.covers_sheet = covers_sheet

    def read(self, path: Path) -> CatalogWorkbook:
        """
        Lê a planilha do disco.

        Args:
            path: Caminho do arquivo .xlsx

        Returns:
            CatalogWorkbook com as linhas de cada aba

        Raises:
            WorkbookError: Arquivo ilegível ou sem nenhuma das abas
        """
        path = Path(path)

        try:
            frames = pd.read_excel(
                path,
                sheet_name=None,
                header=None,
                skiprows=1,
                dtype=object,
                engine="openpyxl",
            )
        except FileNotFoundError as e:
            raise WorkbookError("Planilha não encontrada", source=str(path), cause=e)
        except Exception as e:
            raise WorkbookError(
                "Erro ao processar arquivo. Verifique o formato.",
                source=str(path),
                cause=e,
            )

        return self.read_frames(frames, source=str(path))

    def read_frames(
        self,
        frames: dict[str, pd.DataFrame],
        source: Optional[str] = None,
    ) -> CatalogWorkbook:
        """
        Converte DataFrames (já sem cabeçalho) em linhas do catálogo.

        Args:
            frames: DataFrames por nome de aba
            source: Origem para logs/erros
        """
        components_df = frames.get(self.components_sheet)
        covers_df = frames.get(self.covers_sheet)

        if components_df is None and covers_df is None:
            raise WorkbookError(
                f"Abas '{self.components_sheet}' e '{self.covers_sheet}' não encontradas",
                source=source,
                details={"sheets": list(frames.keys())},
            )

        components = [
            ComponentRow(
                row_index=index,
                status=self._cell(values, COMPONENT_COLUMNS["status"]),
                description=self._cell(values, COMPONENT_COLUMNS["description"]),
                bulk_cost=self._cell(values, COMPONENT_COLUMNS["bulk_cost"]),
                unit_cost=self._cell(values, COMPONENT_COLUMNS["unit_cost"]),
            )
            for index, values in self._iter_rows(components_df)
        ]

        covers = [
            CoverRow(
                row_index=index,
                status=self._cell(values, COVER_COLUMNS["status"]),
                description=self._cell(values, COVER_COLUMNS["description"]),
                cost=self._cell(values, COVER_COLUMNS["cost"]),
            )
            for index, values in self._iter_rows(covers_df)
        ]

        self.logger.debug(
            "Planilha decodificada",
            source=source,
            components=len(components),
            covers=len(covers),
        )

        return CatalogWorkbook(components=components, covers=covers, source=source)

    def _iter_rows(self, df: Optional[pd.DataFrame]):
        """Itera linhas não vazias como (índice, lista de células)."""
        if df is None or df.empty:
            return

        df = df.dropna(how="all")
        df = df.astype(object).where(pd.notna(df), None)

        for position, values in enumerate(df.itertuples(index=False, name=None)):
            yield position, list(values)

    @staticmethod
    def _cell(values: list[Any], column: int) -> Any:
        """Valor da coluna posicional; None se a linha for mais curta."""
        return values[column] if column < len(values) else None
