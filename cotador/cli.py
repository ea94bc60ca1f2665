"""
Interface de linha de comando (CLI) do Cotador.
Usa Typer para uma experiência moderna e rica.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.logging_config import setup_logging
from config.settings import get_settings
from cotador.core.exceptions import CotadorError, StaleCatalogError
from cotador.core.models import QuoteBatchResult
from cotador.core.types import PricingRule, QuoteStatus
from cotador.service import QuoteService

# Inicializa CLI
app = typer.Typer(
    name="cotador",
    help="Cotação de peças de celular a partir da planilha de estoque.",
    add_completion=False,
)

# Console Rico para output formatado
console = Console()


def run_async(coro):
    """Helper para executar corrotinas."""
    return asyncio.run(coro)


def _create_service() -> QuoteService:
    """Cria o serviço com logging configurado."""
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        log_path=settings.log_path,
        json_format=settings.log_json,
    )
    return QuoteService(settings=settings)


@app.command("import")
def import_workbook(
    path: Path = typer.Argument(..., help="Planilha .xlsx com as abas Componentes e Tampas"),
):
    """
    Importa a planilha de estoque, substituindo o banco atual.

    Exemplos:
        cotador import estoque.xlsx
    """
    service = _create_service()

    async def _run():
        await service.load()
        return await service.import_workbook(path)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Importando '{path.name}'...", total=None)

        try:
            result = run_async(_run())
        except CotadorError as e:
            console.print(f"[red]✗ {e.message}[/red]")
            raise typer.Exit(code=1)

    table = Table(title="Importação")
    table.add_column("Aba", style="cyan")
    table.add_column("Importados", justify="right", style="green")
    table.add_column("Ignorados", justify="right", style="yellow")

    table.add_row("Componentes", str(result.components_accepted), str(result.components_skipped))
    table.add_row("Tampas", str(result.covers_accepted), str(result.covers_skipped))

    console.print(table)
    console.print(f"[green]✓ {result.total} itens importados de: {path}[/green]")


@app.command("quote")
def quote(
    text: Optional[str] = typer.Argument(None, help="Pedido (uma peça por linha)"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="Arquivo com o pedido"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Saída em formato JSON"),
):
    """
    Cota um pedido contra o estoque.

    Exemplos:
        cotador quote "tela iphone 11"
        cotador quote --file pedido.txt
        cat pedido.txt | cotador quote --json
    """
    if file is not None:
        text = file.read_text(encoding="utf-8")
    elif text is None and not sys.stdin.isatty():
        text = sys.stdin.read()

    if not text or not text.strip():
        console.print("[yellow]Informe o pedido como argumento, --file ou stdin.[/yellow]")
        raise typer.Exit(code=1)

    service = _create_service()

    async def _run():
        await service.load()
        return await service.quote(text)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Cotando pedido...", total=None)

        try:
            result = run_async(_run())
        except StaleCatalogError:
            console.print("[yellow]O estoque mudou durante a cotação. Tente novamente.[/yellow]")
            raise typer.Exit(code=1)

    if json_output:
        _output_json(result)
        return

    _display_quote(result, empty_catalog=service.catalog.current.is_empty)


@app.command("status")
def status():
    """
    Exibe o resumo do banco de dados.
    """
    service = _create_service()
    summary = run_async(service.load())

    panel = Panel(
        f"""[bold]Banco de dados[/bold]

Itens: [cyan]{summary.total}[/cyan]
Componentes: [green]{summary.components}[/green]
Tampas: [green]{summary.covers}[/green]
Em estoque: [blue]{summary.in_stock}[/blue]
Sem estoque: [red]{summary.out_of_stock}[/red]
Oráculo: [magenta]{service.oracle.name}[/magenta]
        """,
        title="📦 Estoque",
        border_style="blue",
    )

    console.print(panel)


@app.command("reset")
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Não pedir confirmação"),
):
    """
    Apaga todo o banco de dados.
    """
    if not yes:
        typer.confirm("Apagar todo o banco de dados?", abort=True)

    service = _create_service()
    run_async(service.reset())

    console.print("[green]✓ Banco de dados limpo[/green]")


@app.command("version")
def version():
    """
    Exibe a versão do sistema.
    """
    from cotador import __version__

    console.print(f"[bold blue]Cotador[/bold blue] v{__version__}")
    console.print("Cotação de peças de celular com matching semântico")


# FUNÇÕES DE DISPLAY

def _display_quote(result: QuoteBatchResult, empty_catalog: bool = False):
    """Exibe cotação formatada."""
    console.print()

    if empty_catalog:
        console.print("[yellow]Banco de dados vazio. Importe uma planilha primeiro.[/yellow]")

    if not result.requests:
        console.print("[yellow]Nenhuma linha válida no pedido.[/yellow]")
        return

    table = Table(title=f"Cotação: {len(result.requests)} linhas")
    table.add_column("#", style="dim", width=4)
    table.add_column("Pedido", style="white", overflow="fold")
    table.add_column("Peça", style="cyan", overflow="fold")
    table.add_column("Categoria", width=11)
    table.add_column("Custo", justify="right", style="yellow", width=14)
    table.add_column("Preço", justify="right", style="green", width=14)
    table.add_column("Estoque", width=8)

    for i, request in enumerate(result.requests, 1):
        item = request.matched_item

        if request.status != QuoteStatus.COMPLETED or item is None:
            table.add_row(
                str(i),
                escape(request.original_text),
                "[red]Não encontrado[/red]",
                "-",
                "-",
                "-",
                "-",
            )
            continue

        description = escape(item.description)
        if item.pricing_rule == PricingRule.FALLBACK:
            description += " [yellow](5PCS)[/yellow]"

        price = request.format_final_price()
        if not item.in_stock:
            price = f"[dim]{price}[/dim]"

        table.add_row(
            str(i),
            escape(request.original_text),
            description,
            item.category.value,
            item.format_cost(),
            price,
            "[green]✓[/green]" if item.in_stock else "[red]✗[/red]",
        )

    console.print(table)

    console.print(Panel(
        f"[bold]Encontrados:[/bold] {result.completed}\n"
        f"[bold]Não encontrados:[/bold] {result.not_found}\n"
        f"[bold]Total disponível:[/bold] [bold green]{result.format_total()}[/bold green]",
        title="💰 Total",
        border_style="green",
    ))


def _output_json(result: QuoteBatchResult):
    """Exibe resultado em formato JSON."""
    console.print_json(json.dumps(result.model_dump(mode="json"), indent=2, default=str))


# ENTRY POINT

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    main()
