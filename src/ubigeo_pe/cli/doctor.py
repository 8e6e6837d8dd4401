"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ubigeo_pe.core.config import AppSettings
from ubigeo_pe.core.errors import UbigeoError
from ubigeo_pe.core.services.ubigeo_pipeline import build_context

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and source checks.")

_console = Console()


async def _check_sources(settings: AppSettings) -> list[tuple[str, str, bool, str]]:
    """Load each configured source on its own and report the outcome."""

    context = build_context(settings)
    checks = [("hierarchy", settings.hierarchy_source, context.repository.bootstrap())]
    for standard, catalog in context.catalogs.items():
        checks.append((f"{standard.value} catalog", catalog.source, catalog.bootstrap()))

    results = await asyncio.gather(*(coro for _, _, coro in checks), return_exceptions=True)

    rows: list[tuple[str, str, bool, str]] = []
    for (name, source, _), result in zip(checks, results):
        if isinstance(result, UbigeoError):
            rows.append((name, source, False, str(result)))
        elif isinstance(result, BaseException):
            raise result
        else:
            rows.append((name, source, True, f"{len(result)} records"))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ubigeo-pe Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Source", style="white")
    table.add_column("Status", style="white", no_wrap=True)
    table.add_column("Details", style="dim")

    table.add_row("Collation locale", "-", "OK", settings.collation_locale)
    table.add_row("Language", "-", "OK", settings.default_language.label())

    rows = asyncio.run(_check_sources(settings))
    for name, source, ok, detail in rows:
        table.add_row(name, source, "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not all(ok for _, _, ok, _ in rows):
        _console.print(
            "\n[yellow]Note:[/yellow] point the failing source to a reachable URL or file with "
            "`UBIGEO_PE_HIERARCHY_SOURCE`, `UBIGEO_PE_RENIEC_CATALOG_SOURCE` or `UBIGEO_PE_INEI_CATALOG_SOURCE`."
        )
        raise typer.Exit(code=1)
