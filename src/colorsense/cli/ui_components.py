"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `lookup`, `batch` y `suggest`.
"""

from __future__ import annotations

from itertools import groupby
from typing import Sequence

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from colorsense.core.domain.models import ColorResponse, ColorResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("ColorSense", style="bold magenta")
    subtitle = Text("Describe colors • Resolve hex codes • Suggest palettes", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="magenta", padding=(1, 4)))


def swatch(hex_code: str, width: int = 6) -> Text:
    """Bloque de color; vacío si no hay hex."""

    if not hex_code:
        return Text(" " * width)
    return Text(" " * width, style=f"on {hex_code}")


def build_color_panel(response: ColorResponse) -> Panel:
    """Panel para un único color resuelto."""

    header = Text.assemble(swatch(response.hex_code, 10), "  ", (response.color_name, "bold"))
    details = Text()
    details.append(f"{response.hex_code}\n", style="cyan")
    details.append(response.description)
    if response.category:
        details.append(f"\nCategory: {response.category}", style="dim")
    return Panel(Group(header, Text(""), details), title="Color", border_style="magenta")


def build_results_table(results: Sequence[ColorResult], *, title: str = "Colors") -> Table:
    """Tabla Rich para resultados de lote (un fila por entrada, en orden)."""

    table = Table(title=title)
    table.add_column("", no_wrap=True)
    table.add_column("Input", style="white")
    table.add_column("Category", style="dim")
    table.add_column("Color", style="bold")
    table.add_column("Hex", style="cyan", no_wrap=True)
    table.add_column("Description / Error")

    for result in results:
        if result.ok:
            detail = Text(result.description)
        else:
            detail = Text(result.error or "", style="red")
        table.add_row(
            swatch(result.hex_code),
            result.original_input,
            result.category or "",
            result.color_name,
            result.hex_code,
            detail,
        )
    return table


def build_palette_tables(results: Sequence[ColorResult]) -> list[Table]:
    """Una tabla por categoría, respetando el orden de aparición."""

    order: dict[str, int] = {}
    for result in results:
        order.setdefault(result.category or "", len(order))
    ordered = sorted(results, key=lambda r: order[r.category or ""])

    tables: list[Table] = []
    for category, group in groupby(ordered, key=lambda r: r.category or ""):
        table = Table(title=category or "Suggested Colors", title_justify="left")
        table.add_column("", no_wrap=True)
        table.add_column("Color", style="bold")
        table.add_column("Hex", style="cyan", no_wrap=True)
        table.add_column("Description")
        table.add_column("Why", style="dim")
        for result in group:
            table.add_row(
                swatch(result.hex_code),
                result.color_name or result.original_input,
                result.hex_code,
                Text(result.description) if result.ok else Text(result.error or "", style="red"),
                result.rationale or "",
            )
        tables.append(table)
    return tables
