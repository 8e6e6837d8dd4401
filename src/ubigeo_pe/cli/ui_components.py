"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ubigeo_pe.core.domain.language import Language
from ubigeo_pe.core.domain.models import Department, District, Province
from ubigeo_pe.core.services.resolver import Resolution
from ubigeo_pe.core.services.selection import CascadeSelection


def configure_logging(level: str, console: Console | None = None) -> None:
    """Instala un `RichHandler` en el logger raíz del paquete."""

    handler = RichHandler(console=console or Console(stderr=True), show_path=False, markup=False)
    logger = logging.getLogger("ubigeo_pe")
    logger.handlers[:] = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False


def build_departments_table(departments: list[Department]) -> Table:
    table = Table(title="Departamentos")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Nombre", style="white")
    table.add_column("Provincias", style="dim", justify="right")
    for department in departments:
        table.add_row(department.id, department.name, str(len(department.provinces)))
    return table


def build_provinces_table(provinces: list[Province], *, title: str = "Provincias") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Nombre", style="white")
    table.add_column("Distritos", style="dim", justify="right")
    for province in provinces:
        table.add_row(province.id, province.name, str(len(province.districts)))
    return table


def build_districts_table(districts: list[District], *, title: str = "Distritos") -> Table:
    table = Table(title=title)
    table.add_column("UBIGEO (RENIEC)", style="cyan", no_wrap=True)
    table.add_column("Nombre", style="white")
    table.add_column("UBIGEO (INEI)", style="magenta", no_wrap=True)
    for district in districts:
        table.add_row(district.id, district.name, district.alternate_code or "—")
    return table


def build_resolution_panel(
    resolution: Resolution,
    selection: CascadeSelection,
    language: Language,
) -> Panel:
    """Panel con el mensaje de estado y, si hubo match, el resumen de cinco filas."""

    style = "green" if resolution.found else "red"
    body = Text()
    body.append(resolution.message(language) + "\n", style=f"bold {style}")
    if resolution.found:
        body.append("\n")
        for label, value in selection.summary():
            body.append(f"{label}: ", style="bold")
            body.append(f"{value}\n")

    title = Text(resolution.standard.value.upper(), style=f"bold {style}")
    return Panel(body, title=title, border_style=style)
