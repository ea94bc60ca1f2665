"""
Configurações e fixtures compartilhadas para pytest.
"""

from pathlib import Path

import pandas as pd
import pytest

from config.settings import Settings, get_settings
from cotador.catalog import Inventory, InventoryCatalog
from cotador.core.models import CatalogWorkbook, InventoryItem
from cotador.core.types import Category, PricingRule
from fixtures.catalog_rows import (
    COMPONENT_ROWS,
    COVER_ROWS,
    build_workbook,
    make_item,
)


# FIXTURES DE DIRETÓRIOS

@pytest.fixture
def temp_data_dir(tmp_path) -> Path:
    """Cria diretório temporário para dados de teste."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def temp_log_dir(tmp_path) -> Path:
    """Cria diretório temporário para logs de teste."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


# FIXTURES DE ITENS DE ESTOQUE

@pytest.fixture
def item_flex_biometria() -> InventoryItem:
    """Componente: custo 10, standard, em estoque (preço 20)."""
    return make_item("Flex Biometria A11 Preto", cost=10.0, item_id="COMP-0-aaaa0001")


@pytest.fixture
def item_tampa_a11() -> InventoryItem:
    """Tampa: custo 12,50, em estoque (preço 25)."""
    return make_item(
        "Tampa A11 Vermelha",
        cost=12.5,
        category=Category.COVER,
        item_id="TAMP-0-bbbb0001",
    )


@pytest.fixture
def item_tampa_j7_sem_estoque() -> InventoryItem:
    """Tampa: custo 8, sem estoque (preço 20)."""
    return make_item(
        "Tampa J7 Dourada",
        cost=8.0,
        category=Category.COVER,
        in_stock=False,
        item_id="TAMP-1-bbbb0002",
    )


@pytest.fixture
def item_flex_dock_fallback() -> InventoryItem:
    """Componente: custo do lote 6,85, fallback (preço 25)."""
    return make_item(
        "Flex Dock J7",
        cost=6.85,
        pricing_rule=PricingRule.FALLBACK,
        item_id="COMP-1-aaaa0002",
    )


@pytest.fixture
def sample_items(
    item_flex_biometria,
    item_tampa_a11,
    item_tampa_j7_sem_estoque,
    item_flex_dock_fallback,
) -> list[InventoryItem]:
    """Catálogo pequeno, na ordem de importação."""
    return [
        item_flex_biometria,
        item_tampa_a11,
        item_tampa_j7_sem_estoque,
        item_flex_dock_fallback,
    ]


@pytest.fixture
def catalog(sample_items) -> InventoryCatalog:
    """Catálogo populado com os itens de exemplo."""
    catalog = InventoryCatalog()
    catalog.replace(sample_items)
    return catalog


@pytest.fixture
def inventory(catalog) -> Inventory:
    """Snapshot corrente do catálogo de exemplo."""
    return catalog.current


# FIXTURES DE PLANILHA

@pytest.fixture
def sample_workbook() -> CatalogWorkbook:
    """Linhas decodificadas das duas abas."""
    return build_workbook()


@pytest.fixture
def sample_xlsx(tmp_path) -> Path:
    """Planilha .xlsx real com as abas Componentes e Tampas."""
    path = tmp_path / "estoque.xlsx"

    components = pd.DataFrame(
        COMPONENT_ROWS,
        columns=["Status", "Descrição", "5PCS", "1PC"],
    )
    covers = pd.DataFrame(
        COVER_ROWS,
        columns=["Status", "Descrição", "Preço"],
    )

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        components.to_excel(writer, sheet_name="Componentes", index=False)
        covers.to_excel(writer, sheet_name="Tampas", index=False)

    return path


# FIXTURES DE CONFIGURAÇÃO

@pytest.fixture
def settings(temp_data_dir, temp_log_dir) -> Settings:
    """Settings isoladas para testes, sem credenciais do oráculo."""
    return Settings(
        _env_file=None,
        env="testing",
        log_level="DEBUG",
        data_path=temp_data_dir,
        log_path=temp_log_dir,
        gemini_api_key=None,
        oracle_timeout=5.0,
    )


@pytest.fixture
def settings_override(temp_data_dir, temp_log_dir, monkeypatch):
    """Override de settings via ambiente para testes."""
    monkeypatch.setenv("DATA_PATH", str(temp_data_dir))
    monkeypatch.setenv("LOG_PATH", str(temp_log_dir))
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("STORAGE_TYPE", raising=False)

    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
