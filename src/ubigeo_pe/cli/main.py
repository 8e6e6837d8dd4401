"""CLI principal (Typer).

Por qué Typer + Rich:
- Comandos tipados sin boilerplate de argparse.
- Tablas legibles para explorar la jerarquía desde la terminal.

Los comandos solo orquestan: cargan el contexto (`ubigeo_pipeline`), llaman a
los accesores y pintan el resultado. Un fallo de feed termina con código 1.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ubigeo_pe.adapters.json_exporter import export_static_bundles
from ubigeo_pe.cli import doctor
from ubigeo_pe.cli.ui_components import (
    build_departments_table,
    build_districts_table,
    build_provinces_table,
    build_resolution_panel,
    configure_logging,
)
from ubigeo_pe.core.config import AppSettings
from ubigeo_pe.core.domain.language import Language
from ubigeo_pe.core.errors import UbigeoError
from ubigeo_pe.core.services.repository import HierarchyRepository
from ubigeo_pe.core.services.resolver import Standard
from ubigeo_pe.core.services.selection import CascadeSelection
from ubigeo_pe.core.services.ubigeo_pipeline import UbigeoContext, build_context

app = typer.Typer(no_args_is_help=True, help="Jerarquía UBIGEO del Perú (RENIEC / INEI).")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logging INFO."),
) -> None:
    settings = AppSettings()
    configure_logging("INFO" if verbose else settings.log_level)


def _load_context(*, with_catalogs: bool = True) -> UbigeoContext:
    context = build_context(AppSettings())
    if not with_catalogs:
        context.catalogs = {}
    try:
        return asyncio.run(context.bootstrap())
    except UbigeoError as exc:
        _console.print(f"[red]Error al cargar los datos:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _load_repository() -> HierarchyRepository:
    return _load_context(with_catalogs=False).repository


@app.command()
def departments() -> None:
    """Lista los departamentos en orden canónico."""

    repository = _load_repository()
    _console.print(build_departments_table(repository.get_departments()))


@app.command()
def provinces(department_id: str = typer.Argument(..., help="ID de departamento (2 dígitos).")) -> None:
    """Lista las provincias de un departamento."""

    repository = _load_repository()
    department = repository.get_department_by_id(department_id)
    if department is None:
        _console.print(f"[yellow]Departamento {department_id} no encontrado.[/yellow]")
        raise typer.Exit(code=1)
    _console.print(
        build_provinces_table(repository.get_provinces_by_department(department_id), title=department.name)
    )


@app.command()
def districts(province_id: str = typer.Argument(..., help="ID de provincia (4 dígitos).")) -> None:
    """Lista los distritos de una provincia."""

    repository = _load_repository()
    province = repository.get_province_by_id(province_id)
    if province is None:
        _console.print(f"[yellow]Provincia {province_id} no encontrada.[/yellow]")
        raise typer.Exit(code=1)
    _console.print(build_districts_table(repository.get_districts_by_province(province_id), title=province.name))


@app.command()
def lookup(
    code: str = typer.Argument(..., help="Código UBIGEO (se ignoran guiones/espacios)."),
    standard: Standard = typer.Option(Standard.RENIEC, "--standard", "-s", case_sensitive=False),
    language: Optional[Language] = typer.Option(None, "--language", "-l", help="Idioma de los mensajes (es/en)."),
) -> None:
    """Busca un código en el catálogo del estándar y lo resuelve en la jerarquía."""

    settings = AppSettings()
    language = language or settings.default_language

    context = _load_context()
    resolution = context.resolver.resolve(code, standard)

    selection = CascadeSelection(context.repository)
    if resolution.match is not None:
        selection.apply(resolution.match)
    _console.print(build_resolution_panel(resolution, selection, language))
    if not resolution.found:
        raise typer.Exit(code=1)


@app.command()
def export(
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Carpeta de salida (default: export_dir)."),
) -> None:
    """Genera los bundles JSON estáticos a partir del repositorio."""

    settings = AppSettings()
    repository = _load_repository()
    data_root = export_static_bundles(repository=repository, output_dir=out or settings.export_dir)
    _console.print(f"[green]Bundles generados en:[/green] {data_root}")


def run() -> None:
    app()
