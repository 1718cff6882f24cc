"""Taxonomía de errores compartida por el Core, la CLI y la ruta HTTP.

Por qué una raíz común:
- Todo fallo esperado deriva de `ColorSenseError`; los puntos de entrada lo
  distinguen de errores de programación con un solo `except`.
"""

from __future__ import annotations


class ColorSenseError(Exception):
    """Base class for every failure ColorSense reports to its callers."""


class ConfigurationError(ColorSenseError):
    """Required configuration (the AI credential) is missing."""


class RequestShapeError(ColorSenseError):
    """The inbound request does not match any supported shape."""


class ValidationRejectedError(ColorSenseError):
    """The validator judged the input unrelated to colors."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        message = f"'{text}' does not look like a color description"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EmptyResponseError(ColorSenseError):
    """The generation service answered with no text."""

    def __init__(self, message: str = "Empty response from AI") -> None:
        super().__init__(message)


class ResponseFormatError(ColorSenseError):
    """The generation output could not be coerced into the expected JSON.

    The raw output is logged where it is detected; it is never part of the
    message so it does not leak to end callers.
    """

    def __init__(self, message: str = "Invalid response format from AI") -> None:
        super().__init__(message)


class ColorDomainError(ColorSenseError):
    """The generation service itself reported the input is not a color."""


class GenerationServiceError(ColorSenseError):
    """The call to the generation service failed (network, status, SDK)."""
