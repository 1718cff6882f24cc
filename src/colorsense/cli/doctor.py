"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from colorsense.adapters.http_client import probe_url
from colorsense.core.config import GEMINI_OPENAI_BASE_URL, AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PROVIDER_PRESETS: dict[str, dict[str, str]] = {
    "gemini": {"COLORSENSE_AI_BASE_URL": GEMINI_OPENAI_BASE_URL, "COLORSENSE_AI_MODEL": "gemini-2.0-flash-lite"},
    "openai": {"COLORSENSE_AI_BASE_URL": "https://api.openai.com/v1", "COLORSENSE_AI_MODEL": "gpt-4o-mini"},
    "deepseek": {"COLORSENSE_AI_BASE_URL": "https://api.deepseek.com", "COLORSENSE_AI_MODEL": "deepseek-chat"},
    "groq": {"COLORSENSE_AI_BASE_URL": "https://api.groq.com/openai/v1", "COLORSENSE_AI_MODEL": "llama-3.1-8b-instant"},
    "openrouter": {"COLORSENSE_AI_BASE_URL": "https://openrouter.ai/api/v1", "COLORSENSE_AI_MODEL": "openai/gpt-4o-mini"},
    "ollama": {"COLORSENSE_AI_BASE_URL": "http://localhost:11434/v1", "COLORSENSE_AI_MODEL": "llama3"},
}


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ColorSense Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    has_key = bool((settings.ai_api_key or "").strip())
    if has_key:
        table.add_row("AI key", "OK", "Credential configured")
    else:
        table.add_row("AI key", "MISSING", "Set COLORSENSE_AI_API_KEY or run `colorsense doctor setup-ai`")
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("AI model", "OK", settings.ai_model)
    table.add_row("Batching", "OK", f"{settings.batch_size} per batch, {settings.batch_delay_ms} ms pause")
    table.add_row(
        "Validator fallback",
        "OK",
        "accept query" if settings.validator_fallback_valid else "reject query",
    )

    ok_http, detail_http = asyncio.run(probe_url(settings.ai_base_url, settings=settings))
    table.add_row("AI endpoint reachable", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not has_key:
        raise typer.Exit(code=2)


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt(
        "AI provider",
        default="gemini",
        show_default=True,
    ).strip().lower()

    values = PROVIDER_PRESETS.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    base_url = typer.prompt("AI base URL", default=values.get("COLORSENSE_AI_BASE_URL", ""), show_default=True).strip()
    model = typer.prompt("AI model", default=values.get("COLORSENSE_AI_MODEL", ""), show_default=True).strip()
    api_key = typer.prompt("AI API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not model:
        raise typer.BadParameter("base_url and model are required")

    env_path = write_user_env_vars(
        {
            "COLORSENSE_AI_BASE_URL": base_url,
            "COLORSENSE_AI_MODEL": model,
            "COLORSENSE_AI_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
