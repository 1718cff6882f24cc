"""Contrato del servicio de generación de texto.

Por qué Protocol:
- El proveedor IA es una caja negra `generate(prompt) -> text`.
- Permite sustituir el adaptador OpenAI por un stub en tests sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """Contrato mínimo para un proveedor de texto.

    Reglas de diseño:
    - `generate` es asíncrono porque hace I/O de red.
    - Una llamada = un prompt; no se conserva contexto entre llamadas.
    - Puede devolver texto vacío; el llamador decide qué significa.
    """

    async def generate(self, prompt: str) -> str:
        """Envía `prompt` al proveedor y devuelve el texto generado."""

        ...
