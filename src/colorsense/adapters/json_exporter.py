"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con herramientas de diseño y pipelines.
- Mismo formato que la respuesta HTTP (`{"results": [...]}` o un color).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dump_payload(payload: dict[str, Any]) -> str:
    """JSON UTF-8 con formato estable."""

    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_payload_json(*, payload: dict[str, Any], output_path: Path) -> Path:
    """Exporta una respuesta de ColorSense a un fichero JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_payload(payload), encoding="utf-8")
    return output_path
