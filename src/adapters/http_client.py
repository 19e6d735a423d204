"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y verificación TLS para los tres backends.
- Facilita testeo: se inyecta un `httpx.MockTransport` en vez de la red.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str = "",
    timeout_seconds: float | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    `timeout_seconds` sustituye a `settings.http_timeout_seconds` (Racktables
    usa un timeout corto propio).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, application/x-yaml;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    timeout = timeout_seconds if timeout_seconds is not None else settings.http_timeout_seconds
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers=headers,
        verify=settings.verify_tls,
        transport=transport,
    )
