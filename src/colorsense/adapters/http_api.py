"""Ruta HTTP de ColorSense (FastAPI).

`POST /api/color` acepta una de las tres formas de petición que resuelve
`core.services.request_handler` y responde `{"error": mensaje}` si falla.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from colorsense import __version__
from colorsense.core.config import AppSettings
from colorsense.core.errors import (
    ColorDomainError,
    ColorSenseError,
    ConfigurationError,
    RequestShapeError,
    ValidationRejectedError,
)
from colorsense.core.services.color_resolver import ColorResolver
from colorsense.core.services.request_handler import handle_request

logger = logging.getLogger(__name__)


def status_for_error(exc: ColorSenseError) -> int:
    if isinstance(exc, RequestShapeError):
        return 400
    if isinstance(exc, (ValidationRejectedError, ColorDomainError)):
        return 422
    if isinstance(exc, ConfigurationError):
        return 500
    # Empty, unparseable or failed upstream calls.
    return 502


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(settings: AppSettings | None = None, resolver: ColorResolver | None = None) -> FastAPI:
    """Build the FastAPI app; the resolver is created on first use when not given."""

    settings = settings or AppSettings()
    app = FastAPI(title="ColorSense API", version=__version__)
    state: dict[str, ColorResolver | None] = {"resolver": resolver}

    def get_resolver() -> ColorResolver:
        if state["resolver"] is None:
            state["resolver"] = ColorResolver(settings)
        return state["resolver"]

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/color")
    async def color(request: Request) -> Any:
        try:
            payload = await request.json()
        except ValueError:
            return _error_response(400, "Request body must be valid JSON")

        try:
            return await handle_request(payload, get_resolver())
        except ColorSenseError as exc:
            status_code = status_for_error(exc)
            if status_code >= 500:
                logger.error("Error processing color request: %s", exc)
            return _error_response(status_code, str(exc))

    return app


def run(host: str = "127.0.0.1", port: int = 8000, settings: AppSettings | None = None) -> None:
    import uvicorn

    uvicorn.run(create_app(settings), host=host, port=port)
