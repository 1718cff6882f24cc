"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de lo que devuelve el proveedor IA (hex, claves fijas)
  en el mismo lugar donde se define el contrato.
- Alias camelCase para el cable (HTTP/JSON) y snake_case en Python.

Nota:
- Ningún modelo vive más allá de un ciclo request/response; todos son inmutables.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DEFAULT_SUGGESTION_CATEGORY = "Suggested Colors"


def normalize_hex_code(value: str) -> str:
    """Normaliza un hex a `#RRGGBB` en mayúsculas (acepta `#RGB` y sin `#`)."""

    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"not a hex color code: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return "#" + digits.upper()


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Serializa con alias camelCase, omitiendo opcionales ausentes."""

        payload = self.model_dump(mode="json", by_alias=True)
        for key in ("category", "rationale", "reason", "impliedContext"):
            if key in payload and payload[key] is None:
                del payload[key]
        return payload


class ColorQuery(_WireModel):
    """Una petición de color producida por el parser."""

    phrase: str = Field(
        ...,
        min_length=1,
        description="Frase de color tal como la escribió el usuario (recortada).",
    )
    category: str | None = Field(
        default=None,
        description="Etiqueta de agrupación opcional (p.ej. 'Blues').",
    )


class ColorResponse(_WireModel):
    """Respuesta canónica para un color."""

    color_name: str = Field(
        ...,
        alias="colorName",
        min_length=1,
        description="Nombre más preciso del color.",
    )
    hex_code: str = Field(
        ...,
        alias="hexCode",
        description="Código hex normalizado (#RRGGBB).",
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Descripción breve del color.",
    )
    category: str | None = Field(
        default=None,
        description="Categoría del color (del usuario o elegida por el modelo).",
    )
    rationale: str | None = Field(
        default=None,
        description="Motivo de la sugerencia (solo en paletas sugeridas).",
    )

    @field_validator("hex_code")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        return normalize_hex_code(value)


class ColorResult(_WireModel):
    """Resultado por elemento en un lote o una sugerencia.

    Invariante: `error` excluye al resto; si hay error, nombre/hex/descripción
    quedan vacíos.
    """

    original_input: str = Field(
        ...,
        alias="originalInput",
        description="Entrada original que produjo este resultado.",
    )
    color_name: str = Field(default="", alias="colorName")
    hex_code: str = Field(default="", alias="hexCode")
    description: str = Field(default="")
    category: str | None = Field(default=None)
    rationale: str | None = Field(default=None)
    error: str | None = Field(
        default=None,
        description="Mensaje de error si este elemento falló.",
    )

    @model_validator(mode="after")
    def _error_excludes_color(self) -> "ColorResult":
        if self.error is not None:
            if self.color_name or self.hex_code or self.description:
                raise ValueError("a failed ColorResult cannot carry color data")
        elif not (self.color_name and self.hex_code):
            raise ValueError("a successful ColorResult needs colorName and hexCode")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_response(cls, original_input: str, response: ColorResponse) -> "ColorResult":
        return cls(
            original_input=original_input,
            color_name=response.color_name,
            hex_code=response.hex_code,
            description=response.description,
            category=response.category,
            rationale=response.rationale,
            error=None,
        )

    @classmethod
    def failed(cls, original_input: str, error: str, *, category: str | None = None) -> "ColorResult":
        return cls(original_input=original_input, category=category, error=error or "Unknown error")


class ValidationVerdict(_WireModel):
    """Veredicto efímero del validador."""

    valid: bool = Field(..., description="¿La consulta está relacionada con colores?")
    reason: str | None = Field(default=None, description="Explicación breve del veredicto.")
    implied_context: str | None = Field(
        default=None,
        alias="impliedContext",
        description="Contexto de color inferido para entradas ambiguas.",
    )


class ResultsEnvelope(_WireModel):
    """Respuesta de lote/sugerencia: `{"results": [...]}`."""

    results: list[ColorResult] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"results": [r.to_payload() for r in self.results]}
