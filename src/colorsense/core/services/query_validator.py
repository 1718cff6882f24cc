"""Validación de relevancia cromática.

Pregunta al proveedor IA si una frase trata de colores, directa o
implícitamente (ambientes, temas, materiales, estaciones).

Nota:
- Los fallos del proveedor no se propagan: una llamada fallida o un veredicto
  ilegible se convierten en el veredicto de respaldo configurado.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from colorsense.core.config import AppSettings
from colorsense.core.domain.models import ValidationVerdict
from colorsense.core.errors import ColorSenseError, ConfigurationError, EmptyResponseError
from colorsense.core.interfaces.generator import TextGenerator
from colorsense.core.json_extraction import JsonKind, extract_json

logger = logging.getLogger(__name__)


def build_validation_prompt(text: str) -> str:
    return (
        f'Given this user input: "{text}"\n\n'
        "Decide whether it is related to COLORS. Count it as valid when it names or describes a color "
        "directly (e.g. 'sage green', 'the blue of a summer sky') or implies one through context: "
        "moods, themes, materials, seasons, emotions, places, objects or design briefs "
        "(e.g. 'cozy autumn cabin', 'melancholy', 'brushed copper').\n"
        "Mark it invalid only when it has nothing to do with color (e.g. arithmetic, general trivia, "
        "requests for unrelated advice).\n\n"
        "Respond ONLY with a JSON object in this exact format, with no additional text:\n"
        "{\n"
        '  "valid": true or false,\n'
        '  "reason": "one short sentence explaining the verdict",\n'
        '  "impliedContext": "for indirect or invalid input, a short color context it suggests '
        '(e.g. \'warm earthy autumn tones\'); otherwise an empty string"\n'
        "}"
    )


class QueryValidator:
    """Juzga si un texto está relacionado con colores."""

    def __init__(self, generator: TextGenerator, settings: AppSettings | None = None) -> None:
        self._generator = generator
        self._settings = settings or AppSettings()

    def fallback_verdict(self, reason: str) -> ValidationVerdict:
        return ValidationVerdict(valid=self._settings.validator_fallback_valid, reason=reason)

    async def validate(self, text: str) -> ValidationVerdict:
        self._settings.require_api_key()

        try:
            response_text = await self._generator.generate(build_validation_prompt(text))
            if not (response_text or "").strip():
                raise EmptyResponseError()
            data = extract_json(response_text, JsonKind.OBJECT)
            verdict = ValidationVerdict.model_validate(data)
        except ConfigurationError:
            raise
        except (ColorSenseError, ValidationError) as exc:
            logger.warning("Validator failed for %r, using fallback verdict: %s", text, exc)
            return self.fallback_verdict(f"validator_unavailable:{type(exc).__name__}")
        except Exception as exc:
            logger.exception("Unexpected validator failure for %r", text)
            return self.fallback_verdict(f"validator_unavailable:{type(exc).__name__}")

        if verdict.implied_context is not None and not verdict.implied_context.strip():
            verdict = verdict.model_copy(update={"implied_context": None})
        logger.debug("Validator verdict for %r: %s", text, verdict)
        return verdict
