"""Orquestación de la resolución de colores.

Por qué un único servicio:
- Concentra los tres caminos (color único, lote, sugerencia de paleta) que
  comparten prompt -> proveedor IA -> extracción JSON -> modelos tipados.
- El lote y la sugerencia aíslan fallos por elemento; el color único los
  propaga al llamador.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from pydantic import ValidationError

from colorsense.adapters.ai_generator import OpenAIGenerator
from colorsense.core.config import AppSettings
from colorsense.core.domain.models import (
    DEFAULT_SUGGESTION_CATEGORY,
    ColorQuery,
    ColorResponse,
    ColorResult,
)
from colorsense.core.errors import (
    ColorDomainError,
    EmptyResponseError,
    ResponseFormatError,
    ValidationRejectedError,
)
from colorsense.core.interfaces.generator import TextGenerator
from colorsense.core.json_extraction import JsonKind, extract_json
from colorsense.core.services.query_validator import QueryValidator

logger = logging.getLogger(__name__)

MIN_SUGGESTIONS = 3
MAX_SUGGESTIONS = 8
GENERIC_IMPLIED_CONTEXT = "color palette inspired by the mood, theme and materials of this request"


def build_color_prompt(phrase: str) -> str:
    return (
        f'Given this color description: "{phrase}"\n\n'
        "Identify the exact color being described and respond ONLY with ONE JSON object in this exact "
        "format, with no additional text:\n"
        "{\n"
        '  "colorName": "the most accurate color name",\n'
        '  "hexCode": "the hex code (e.g., #FF5733)",\n'
        '  "description": "a very brief description of the color (20 words max)"\n'
        "}\n\n"
        "Be precise: if the input is a specific named color (like 'terracotta' or 'sage green'), "
        "your answer must match that exact color. For longer or complex descriptions, extract the "
        "core color concept.\n"
        "If the input is not a color and implies no color at all, respond ONLY with this JSON object "
        'instead: {"error": "short explanation of why this is not a color"}'
    )


def build_suggestion_prompt(query: str) -> str:
    return (
        f'I need color recommendations for: "{query}"\n\n'
        f"Analyze the request and suggest {MIN_SUGGESTIONS}-{MAX_SUGGESTIONS} appropriate colors. "
        "Respond ONLY with a JSON array in this exact format, with NO additional text:\n"
        "[\n"
        "  {\n"
        '    "colorName": "name of the suggested color",\n'
        '    "hexCode": "the hex code (e.g., #FF5733)",\n'
        '    "description": "the color\'s visual quality only (15 words max)",\n'
        '    "category": "context-specific category taken from the request",\n'
        '    "rationale": "optional: one short sentence on why this color fits"\n'
        "  }\n"
        "]\n\n"
        "GUIDELINES:\n"
        "- Derive categories from what the request mentions: items (e.g. 'shirt and pants' -> "
        "'Shirt Colors', 'Pant Colors'), rooms or spaces ('Wall Colors', 'Accent Colors'), or "
        "descriptive labels that fit a theme or palette.\n"
        "- The description field describes ONLY visual appearance (e.g. 'deep blue with subtle "
        "green undertones'); no advice or non-color information."
    )


def _coerce_response(data: dict[str, Any], *, category: str | None = None) -> ColorResponse:
    payload = dict(data)
    if category is not None:
        payload["category"] = category
    try:
        return ColorResponse.model_validate(payload)
    except ValidationError as exc:
        logger.warning("AI response does not match the color schema: %r (%s)", data, exc)
        raise ResponseFormatError() from exc


class ColorResolver:
    """Resuelve colores y sugiere paletas contra el servicio de generación.

    La configuración se captura al construir; cada entrada pública falla con
    `ConfigurationError` antes de cualquier llamada si falta la API key.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        generator: TextGenerator | None = None,
        validator: QueryValidator | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._generator = generator or OpenAIGenerator(self._settings)
        self._validator = validator or QueryValidator(self._generator, self._settings)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def _generate_text(self, prompt: str) -> str:
        text = await self._generator.generate(prompt)
        if not (text or "").strip():
            raise EmptyResponseError()
        return text

    async def resolve_one(self, query: ColorQuery) -> ColorResponse:
        """Resuelve una sola frase de color; propaga cualquier fallo."""

        self._settings.require_api_key()

        verdict = await self._validator.validate(query.phrase)
        if not verdict.valid:
            raise ValidationRejectedError(query.phrase, verdict.reason)

        text = await self._generate_text(build_color_prompt(query.phrase))
        data = extract_json(text, JsonKind.OBJECT)

        if data.get("error"):
            raise ColorDomainError(str(data["error"]))

        response = _coerce_response(data, category=query.category)
        logger.debug("Resolved %r -> %s %s", query.phrase, response.color_name, response.hex_code)
        return response

    async def _resolve_item(self, query: ColorQuery) -> ColorResult:
        try:
            response = await self.resolve_one(query)
        except Exception as exc:
            logger.error("Error processing color %r: %s", query.phrase, exc)
            return ColorResult.failed(query.phrase, str(exc), category=query.category)
        return ColorResult.from_response(query.phrase, response)

    async def resolve_many(
        self,
        queries: Sequence[ColorQuery],
        batch_size: int | None = None,
        inter_batch_delay_ms: int | None = None,
    ) -> list[ColorResult]:
        """Resuelve en lotes secuenciales de tamaño fijo; orden de salida = orden de entrada."""

        self._settings.require_api_key()

        size = batch_size if batch_size is not None else self._settings.batch_size
        delay_ms = inter_batch_delay_ms if inter_batch_delay_ms is not None else self._settings.batch_delay_ms
        if size < 1:
            raise ValueError("batch_size must be >= 1")

        results: list[ColorResult] = []
        for start in range(0, len(queries), size):
            batch = queries[start : start + size]
            results.extend(await asyncio.gather(*(self._resolve_item(q) for q in batch)))

            if start + size < len(queries) and delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000)

        return results

    def _suggestion_results(self, entries: list[Any]) -> list[ColorResult]:
        if len(entries) < MIN_SUGGESTIONS:
            logger.warning("AI returned %d suggestions (expected at least %d)", len(entries), MIN_SUGGESTIONS)
        if len(entries) > MAX_SUGGESTIONS:
            logger.info("Truncating %d suggestions to %d", len(entries), MAX_SUGGESTIONS)
            entries = entries[:MAX_SUGGESTIONS]

        results: list[ColorResult] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning("Suggestion #%d is not a JSON object: %r", index, entry)
                results.append(ColorResult.failed(f"suggestion #{index + 1}", "Invalid response format from AI"))
                continue
            name = str(entry.get("colorName") or f"suggestion #{index + 1}")
            category = entry.get("category") or DEFAULT_SUGGESTION_CATEGORY
            try:
                response = _coerce_response(entry, category=str(category))
            except ResponseFormatError as exc:
                results.append(ColorResult.failed(name, str(exc), category=str(category)))
                continue
            results.append(ColorResult.from_response(response.color_name, response))
        return results

    async def suggest(self, query: str) -> list[ColorResult]:
        """Sugiere una paleta categorizada; una entrada mala no tumba a las demás."""

        self._settings.require_api_key()

        verdict = await self._validator.validate(query)
        effective_query = query
        if not verdict.valid:
            implied = verdict.implied_context or GENERIC_IMPLIED_CONTEXT
            effective_query = f"{query} ({implied})"
            logger.info("Query %r not directly color-related; using implied context %r", query, implied)

        text = await self._generate_text(build_suggestion_prompt(effective_query))
        entries = extract_json(text, JsonKind.ARRAY)
        return self._suggestion_results(entries)
