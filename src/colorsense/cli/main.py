"""CLI de ColorSense (Typer + Rich).

Por qué la CLI es delgada:
- Todo el parsing y la orquestación viven en `core.services`; aquí solo se
  leen argumentos, se invoca el resolver y se pinta el resultado.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from colorsense.adapters.http_api import run as run_http
from colorsense.adapters.json_exporter import dump_payload, export_payload_json
from colorsense.cli import doctor
from colorsense.cli.ui_components import (
    build_color_panel,
    build_palette_tables,
    build_results_table,
    print_banner,
)
from colorsense.core.config import AppSettings
from colorsense.core.domain.models import ColorQuery, ResultsEnvelope
from colorsense.core.errors import ColorSenseError, ConfigurationError
from colorsense.core.services.color_resolver import ColorResolver
from colorsense.core.services.input_parser import parse
from colorsense.logging_utils import configure_logging

T = TypeVar("T")

app = typer.Typer(
    no_args_is_help=True,
    help="Turn free-form color descriptions into names, hex codes and palettes.",
)
app.add_typer(doctor.app, name="doctor")

console = Console()
logger = logging.getLogger(__name__)


def build_resolver(settings: AppSettings) -> ColorResolver:
    return ColorResolver(settings)


def _execute(work: Callable[[ColorResolver], Awaitable[T]]) -> T:
    """Ejecuta `work` con un resolver nuevo; traduce errores a códigos de salida."""

    settings = AppSettings()
    try:
        resolver = build_resolver(settings)
        return asyncio.run(work(resolver))
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except ColorSenseError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _emit_json(payload: dict[str, Any], output: Optional[Path], as_json: bool) -> None:
    if output is not None:
        path = export_payload_json(payload=payload, output_path=output)
        console.print(f"[green]Saved results to:[/green] {path}")
    if as_json:
        typer.echo(dump_payload(payload), nl=False)


def _read_input(text: Optional[str], file: Optional[Path]) -> str:
    if text and file:
        raise typer.BadParameter("Pass either TEXT or --file, not both")
    if file is not None:
        return file.read_text(encoding="utf-8")
    if text:
        return text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise typer.BadParameter("Provide TEXT, --file or pipe text on stdin")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """ColorSense command line."""

    settings = AppSettings()
    configure_logging(logging.DEBUG if verbose else settings.log_level)


@app.command()
def lookup(
    text: str = typer.Argument(..., help="Color description, e.g. 'sunset orange'."),
    as_json: bool = typer.Option(False, "--json", help="Print the response as JSON."),
) -> None:
    """Resolve a single color description."""

    if not text.strip():
        raise typer.BadParameter("Color description is required")

    response = _execute(lambda resolver: resolver.resolve_one(ColorQuery(phrase=text.strip())))
    if as_json:
        typer.echo(dump_payload(response.to_payload()), nl=False)
        return
    console.print(build_color_panel(response))


@app.command()
def batch(
    text: Optional[str] = typer.Argument(None, help="Colors separated by lines, bullets or commas."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read input from a file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results JSON to this path."),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON."),
) -> None:
    """Parse several color descriptions and resolve them in batches."""

    queries = parse(_read_input(text, file))
    if not queries:
        raise typer.BadParameter("No color descriptions provided")
    logger.info("Parsed %d color queries", len(queries))

    results = _execute(lambda resolver: resolver.resolve_many(queries))
    payload = ResultsEnvelope(results=results).to_payload()
    _emit_json(payload, output, as_json)
    if not as_json:
        console.print(build_results_table(results))

    if results and all(not r.ok for r in results):
        raise typer.Exit(code=1)


@app.command()
def suggest(
    query: str = typer.Argument(..., help="Context to build a palette for, e.g. 'cozy reading nook'."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results JSON to this path."),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON."),
) -> None:
    """Suggest a categorized palette for a mood, theme, room or outfit."""

    if not query.strip():
        raise typer.BadParameter("Suggestion query is required")

    results = _execute(lambda resolver: resolver.suggest(query.strip()))
    payload = ResultsEnvelope(results=results).to_payload()
    _emit_json(payload, output, as_json)
    if not as_json:
        print_banner(console)
        for table in build_palette_tables(results):
            console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
) -> None:
    """Serve `POST /api/color` over HTTP."""

    run_http(host=host, port=port, settings=AppSettings())


def run() -> None:
    app()


if __name__ == "__main__":
    run()
