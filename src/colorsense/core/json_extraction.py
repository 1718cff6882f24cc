"""Extracción defensiva de JSON desde la salida libre del proveedor IA.

Por qué:
- Los modelos envuelven el JSON pedido en prosa o bloques de código.
- Todos los caminos del resolver pasan por `extract_json`, que recorta desde
  el primer corchete/llave de apertura hasta el último de cierre.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from colorsense.core.errors import ResponseFormatError

logger = logging.getLogger(__name__)


class JsonKind(str, Enum):
    """Top-level JSON value expected from the provider."""

    OBJECT = "object"
    ARRAY = "array"

    @property
    def brackets(self) -> tuple[str, str]:
        return ("{", "}") if self is JsonKind.OBJECT else ("[", "]")

    @property
    def python_type(self) -> type:
        return dict if self is JsonKind.OBJECT else list


def _slice_candidate(text: str, kind: JsonKind) -> str:
    opening, closing = kind.brackets
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 and end == -1:
        return text.strip()
    if start == -1 or end < start:
        raise ResponseFormatError()
    return text[start : end + 1]


def extract_json(text: str | None, kind: JsonKind = JsonKind.OBJECT) -> Any:
    """Return the first JSON value of `kind` embedded in `text`.

    Raises `ResponseFormatError` when nothing of the requested kind can be
    decoded. The raw text is logged, never included in the error.
    """

    raw = text or ""
    try:
        candidate = _slice_candidate(raw, kind)
        value = json.loads(candidate)
    except (ResponseFormatError, ValueError, RecursionError) as exc:
        logger.warning("Failed to parse %s from AI response: %r (%s)", kind.value, raw, exc)
        raise ResponseFormatError() from exc

    if not isinstance(value, kind.python_type):
        logger.warning("AI response is not a JSON %s: %r", kind.value, raw)
        raise ResponseFormatError()
    return value
