"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los servicios reciben `AppSettings` en su constructor; nadie lee el entorno
  a mitad de una llamada.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from colorsense import __version__
from colorsense.core.errors import ConfigurationError

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "colorsense"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "colorsense"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "colorsense"
    return Path.home() / ".config" / "colorsense"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ColorSense user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI, HTTP y adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="COLORSENSE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    ai_api_key: str | None = Field(
        default=None,
        description="API key del proveedor IA (endpoint compatible OpenAI).",
    )
    ai_base_url: str = Field(
        default=GEMINI_OPENAI_BASE_URL,
        min_length=8,
        description="Base URL compatible OpenAI (por defecto Gemini).",
    )
    ai_model: str = Field(
        default="gemini-2.0-flash-lite",
        min_length=1,
        description="Modelo usado para validar, resolver y sugerir colores.",
    )
    ai_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Temperatura de muestreo para las llamadas de generación.",
    )
    ai_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por llamada IA; sin valor se usa el del SDK.",
    )

    batch_size: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Colores resueltos en paralelo por lote.",
    )
    batch_delay_ms: int = Field(
        default=100,
        ge=0,
        description="Pausa fija entre lotes (milisegundos).",
    )
    validator_fallback_valid: bool = Field(
        default=True,
        description="Veredicto cuando el validador falla (True = aceptar la consulta).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de las comprobaciones HTTP del comando doctor.",
    )
    user_agent: str = Field(
        default=f"colorsense/{__version__}",
        min_length=1,
        description="User-Agent para peticiones HTTP propias.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging por defecto de la CLI y el servidor.",
    )

    def require_api_key(self) -> str:
        """Devuelve la API key o falla antes de cualquier llamada de red."""

        api_key = (self.ai_api_key or "").strip()
        if not api_key:
            raise ConfigurationError(
                "AI API key not configured (set COLORSENSE_AI_API_KEY or run `colorsense doctor setup-ai`)."
            )
        return api_key
