"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from colorsense.core.interfaces.generator import TextGenerator

__all__ = ["TextGenerator"]
