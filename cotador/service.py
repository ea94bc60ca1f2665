"""
QuoteService: Orquestrador principal do sistema.
Coordena importação do estoque, persistência e cotação de pedidos.
"""

from pathlib import Path
from typing import Optional

from config.logging_config import LoggerMixin, bound_context
from config.settings import Settings, get_settings
from cotador.catalog import (
    IngestionResult,
    InventoryBuilder,
    InventoryCatalog,
    WorkbookReader,
    items_signature,
)
from cotador.core.exceptions import SnapshotCorruptedError, StaleCatalogError
from cotador.core.models import CatalogSummary, CatalogWorkbook, QuoteBatchResult
from cotador.oracle import MatchOracle, create_oracle
from cotador.pipeline import (
    CandidateRanker,
    MatchResolver,
    PriceCalculator,
    QuoteBatchProcessor,
)
from cotador.storage import BaseStorage, create_storage


class QuoteService(LoggerMixin):
    """
    Orquestrador do sistema de cotação.

    Responsabilidades:
    - Carregar o snapshot do estoque ao iniciar
    - Importar planilhas (substituindo o catálogo inteiro)
    - Limpar o banco de dados
    - Cotar pedidos contra o catálogo vigente
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        oracle: Optional[MatchOracle] = None,
        storage: Optional[BaseStorage] = None,
        catalog: Optional[InventoryCatalog] = None,
    ):
        """
        Inicializa o serviço.

        Args:
            settings: Configurações (None = get_settings())
            oracle: Oráculo de matching (None = conforme configurações)
            storage: Backend do snapshot (None = conforme configurações)
            catalog: Catálogo compartilhado (None = catálogo vazio novo)
        """
        self.settings = settings or get_settings()

        self.catalog = catalog or InventoryCatalog()
        self.storage = storage or create_storage(
            self.settings.storage_type,
            self.settings.data_path,
        )
        self.oracle = oracle or create_oracle(self.settings)

        self.reader = WorkbookReader()
        self.builder = InventoryBuilder()
        self.calculator = PriceCalculator()
        self.resolver = MatchResolver(
            oracle=self.oracle,
            ranker=CandidateRanker(limit=self.settings.candidate_limit),
            timeout=self.settings.oracle_timeout,
        )
        self.processor = QuoteBatchProcessor(
            resolver=self.resolver,
            calculator=self.calculator,
            max_concurrency=self.settings.max_concurrency,
            min_line_length=self.settings.min_line_length,
        )

        self.logger.debug(
            "QuoteService inicializado",
            storage_type=self.storage.storage_type.value,
            oracle=self.oracle.name,
        )

    async def load(self) -> CatalogSummary:
        """
        Carrega o snapshot salvo para o catálogo.
        Snapshot ausente ou ilegível resulta em catálogo vazio.
        """
        log = self.log_operation("load")

        try:
            items = await self.storage.load_items()
        except SnapshotCorruptedError as e:
            log.error("Snapshot ilegível; iniciando com catálogo vazio", error=str(e))
            items = []

        if items:
            async with self.catalog.write_lock:
                self.catalog.replace(items)
            log.info("Banco de dados carregado", items=len(items))

        return self.summary()

    async def import_workbook(self, path: Path) -> IngestionResult:
        """
        Importa planilha .xlsx com as abas Componentes e Tampas.

        Raises:
            WorkbookError: Arquivo ilegível ou sem as abas
            IngestionError: Nenhum item válido (catálogo inalterado)
        """
        workbook = self.reader.read(Path(path))
        return await self.import_rows(workbook)

    async def import_rows(self, workbook: CatalogWorkbook) -> IngestionResult:
        """Importa linhas já decodificadas."""
        previous = items_signature(self.catalog.current)

        result = await self.builder.ingest(workbook, self.catalog, self.storage)

        self.log_operation("import", source=workbook.source).info(
            "Importação concluída",
            items=result.total,
            skipped=result.skipped,
            unchanged=previous == items_signature(result.items),
        )
        return result

    async def reset(self) -> None:
        """Apaga todo o banco de dados (memória e snapshot)."""
        async with self.catalog.write_lock:
            await self.storage.clear()
            self.catalog.clear()

        self.log_operation("reset").info("Banco de dados limpo")

    async def quote(self, text: str) -> QuoteBatchResult:
        """
        Cota um pedido com uma peça por linha.

        Raises:
            StaleCatalogError: Catálogo trocado ou limpo durante a cotação
        """
        inventory = self.catalog.current
        with bound_context(catalog_generation=inventory.generation):
            result = await self.processor.process_batch(text, inventory)

        if not self.catalog.is_current(result.catalog_generation):
            self.log_operation("quote").warning(
                "Catálogo alterado durante a cotação; resultado descartado",
                expected_generation=result.catalog_generation,
                current_generation=self.catalog.generation,
            )
            raise StaleCatalogError(
                expected_generation=result.catalog_generation,
                current_generation=self.catalog.generation,
            )

        return result

    def summary(self) -> CatalogSummary:
        """Resumo do catálogo vigente."""
        return self.catalog.current.summary()
