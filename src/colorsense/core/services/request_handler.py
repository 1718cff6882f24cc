"""Frontera de entrada compartida por la ruta HTTP y llamadores programáticos.

Exactamente uno de `colorDescription`, `colorDescriptions` o
`suggestionQuery` elige el modo. Cualquier otra forma se rechaza con
`RequestShapeError` antes de tocar el resolver.
"""

from __future__ import annotations

from typing import Any, Mapping

from colorsense.core.domain.models import ColorQuery, ResultsEnvelope
from colorsense.core.errors import RequestShapeError
from colorsense.core.services.color_resolver import ColorResolver

REQUEST_FIELDS = ("colorDescription", "colorDescriptions", "suggestionQuery")


def _require_text(payload: Mapping[str, Any], field: str) -> str:
    value = payload[field]
    if not isinstance(value, str) or not value.strip():
        raise RequestShapeError(f"'{field}' must be a non-empty string")
    return value.strip()


def _require_text_list(payload: Mapping[str, Any], field: str) -> list[str]:
    value = payload[field]
    if not isinstance(value, list):
        raise RequestShapeError(f"'{field}' must be a list of strings")
    if not value:
        raise RequestShapeError("No color descriptions provided")
    items: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise RequestShapeError(f"'{field}[{index}]' must be a non-empty string")
        items.append(item.strip())
    return items


def detect_mode(payload: Any) -> str:
    """Return the single request field present, or raise `RequestShapeError`."""

    if not isinstance(payload, Mapping):
        raise RequestShapeError("Request body must be a JSON object")
    present = [field for field in REQUEST_FIELDS if payload.get(field) is not None]
    if not present:
        raise RequestShapeError(
            "Color description is required: provide one of " + ", ".join(REQUEST_FIELDS)
        )
    if len(present) > 1:
        raise RequestShapeError("Provide exactly one of " + ", ".join(REQUEST_FIELDS) + f" (got {', '.join(present)})")
    return present[0]


async def handle_request(payload: Any, resolver: ColorResolver) -> dict[str, Any]:
    """Dispatch one inbound request and return its JSON-ready response."""

    mode = detect_mode(payload)

    if mode == "colorDescription":
        phrase = _require_text(payload, mode)
        response = await resolver.resolve_one(ColorQuery(phrase=phrase))
        return response.to_payload()

    if mode == "colorDescriptions":
        queries = [ColorQuery(phrase=item) for item in _require_text_list(payload, mode)]
        results = await resolver.resolve_many(queries)
        return ResultsEnvelope(results=results).to_payload()

    query = _require_text(payload, mode)
    results = await resolver.suggest(query)
    return ResultsEnvelope(results=results).to_payload()
