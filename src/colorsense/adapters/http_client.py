"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers de las peticiones HTTP propias (diagnóstico).
- Facilita testeo: se puede sustituir por un cliente con `MockTransport`.

El tráfico hacia el proveedor IA no pasa por aquí: lo gestiona el SDK OpenAI.
"""

from __future__ import annotations

import httpx

from colorsense.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def probe_url(
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Comprueba que `url` responde. Cualquier status HTTP cuenta como alcanzable."""

    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    return True, f"HTTP {response.status_code}"
