"""Parser de entrada: texto libre -> lista ordenada de `ColorQuery`.

Cómo funciona:
- Cascada de estrategias puras (líneas, viñetas, comas); gana la primera que
  produce más de un elemento.
- En modo líneas se entienden cabeceras `Categoría: a, b y c`; una línea sin
  dos puntos hereda la última categoría vista.
"""

from __future__ import annotations

import re
from typing import Callable, Sequence

from colorsense.core.domain.models import ColorQuery

SplitStrategy = Callable[[str], list[str]]

_LINE_RE = re.compile(r"\r?\n+")
# "-" splits only at the start or after whitespace so "blue-green" survives.
_BULLET_RE = re.compile(r"[•*]+\s*|(?:^|\s)-+\s*")
_COMMA_RE = re.compile(r",\s*")
_PHRASE_SEP_RE = re.compile(r"\s*,\s*|\s+and\s+", re.IGNORECASE)
_LEADING_BULLET_RE = re.compile(r"^\s*[•*\-]+\s*")


def _non_blank(parts: Sequence[str]) -> list[str]:
    return [part.strip() for part in parts if part and part.strip()]


def split_lines(text: str) -> list[str]:
    return _non_blank(_LINE_RE.split(text))


def split_bullets(text: str) -> list[str]:
    return _non_blank(_BULLET_RE.split(text))


def split_commas(text: str) -> list[str]:
    return _non_blank(_COMMA_RE.split(text))


STRATEGIES: tuple[SplitStrategy, ...] = (split_lines, split_bullets, split_commas)


def split_phrases(segment: str) -> list[str]:
    """Split one line segment on commas or the standalone word "and"."""

    return _non_blank(_PHRASE_SEP_RE.split(segment))


def queries_from_lines(lines: Sequence[str]) -> list[ColorQuery]:
    """Interpret lines with optional `Category:` headers.

    A header with nothing after the colon only sets the category. Lines
    without a colon inherit the last category seen.
    """

    queries: list[ColorQuery] = []
    category: str | None = None
    for raw_line in lines:
        line = _LEADING_BULLET_RE.sub("", raw_line).strip()
        if not line:
            continue
        if ":" in line:
            header, remainder = line.split(":", 1)
            header = header.strip()
            if header:
                category = header
        else:
            remainder = line
        for phrase in split_phrases(remainder):
            queries.append(ColorQuery(phrase=phrase, category=category))
    return queries


def parse(raw_text: str, strategies: Sequence[SplitStrategy] = STRATEGIES) -> list[ColorQuery]:
    """Turn free-form text into color queries, preserving input order."""

    text = raw_text or ""
    if not text.strip():
        return []

    for strategy in strategies:
        items = strategy(text)
        if len(items) <= 1:
            continue
        if strategy is split_lines:
            return queries_from_lines(items)
        return [ColorQuery(phrase=item) for item in items]

    return [ColorQuery(phrase=text.strip())]
