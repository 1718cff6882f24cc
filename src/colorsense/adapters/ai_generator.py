"""Adaptador del proveedor IA (endpoint compatible OpenAI vía SDK OpenAI).

Responsabilidad:
- Implementar `TextGenerator`: un prompt de usuario -> texto generado.
- Sin streaming, sin contexto multi-turno, sin reintentos (`max_retries=0`).
- Traducir fallos del SDK a `GenerationServiceError`.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import APIError, AsyncOpenAI

from colorsense.core.config import AppSettings
from colorsense.core.errors import GenerationServiceError

logger = logging.getLogger(__name__)


def build_ai_client(*, settings: AppSettings) -> AsyncOpenAI:
    """Crea el cliente `AsyncOpenAI`; falla con `ConfigurationError` sin API key."""

    kwargs: dict[str, Any] = {
        "api_key": settings.require_api_key(),
        "base_url": settings.ai_base_url,
        "max_retries": 0,
    }
    # Sin timeout configurado se usa el default del SDK.
    if settings.ai_timeout_seconds is not None:
        kwargs["timeout"] = settings.ai_timeout_seconds
    return AsyncOpenAI(**kwargs)


class OpenAIGenerator:
    """`TextGenerator` sobre chat completions compatibles OpenAI (Gemini, DeepSeek, Groq...)."""

    def __init__(self, settings: AppSettings | None = None, *, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_ai_client(settings=self._settings)

    @property
    def model(self) -> str:
        return self._settings.ai_model

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.ai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._settings.ai_temperature,
            )
        except APIError as exc:
            status = getattr(exc, "status_code", None)
            logger.error("AI provider call failed (status=%s): %s", status, exc)
            raise GenerationServiceError(f"AI provider request failed: {type(exc).__name__}") from exc

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()
