"""Cliente PuppetDB (API de consultas v4).

- `facts`: `["=", "certname", <fqdn>]` -> lista de `{certname, name, value}`.
- `nodes`: `["=", ["fact", <name>], <value>]` -> lista de `{certname}`. Un
  valor booleano también casa con su forma string (`true`/`"true"`).

Cualquier fallo de transporte se traduce a `SourceUnavailableError`; una
respuesta vacía es "no encontrado", no un error.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import SourceUnavailableError
from core.domain.models import FactSet
from core.interfaces.sources import FactStore

logger = logging.getLogger(__name__)

SOURCE = "puppetdb"
QUERY_PREFIX = "/pdb/query/v4"


class PuppetDBClient(FactStore):
    """Consultas de solo lectura contra PuppetDB."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_async_client(
            self._settings,
            base_url=self._settings.puppetdb_url.rstrip("/"),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _query(self, endpoint: str, query: list[Any]) -> list[dict[str, Any]]:
        params = {"query": json.dumps(query)}
        try:
            resp = await self._client.get(f"{QUERY_PREFIX}/{endpoint}", params=params)
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(SOURCE, f"{type(exc).__name__}: {exc}") from exc

        if resp.status_code != 200:
            raise SourceUnavailableError(SOURCE, f"HTTP {resp.status_code} on {endpoint}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise SourceUnavailableError(SOURCE, f"malformed response on {endpoint}") from exc
        if not isinstance(data, list):
            raise SourceUnavailableError(SOURCE, f"unexpected payload on {endpoint}")
        return [row for row in data if isinstance(row, dict)]

    async def lookup(self, fqdn: str) -> FactSet | None:
        rows = await self._query("facts", ["=", "certname", fqdn])
        if not rows:
            return None

        facts: dict[str, Any] = {}
        for row in rows:
            name = row.get("name")
            if isinstance(name, str):
                facts[name] = row.get("value")
        logger.debug("puppetdb: %d facts for %s", len(facts), fqdn)
        return FactSet(facts)

    async def nodes_with_fact(self, name: str, value: Any) -> list[str]:
        condition: list[Any] = ["=", ["fact", name], value]
        if isinstance(value, bool):
            # PuppetDB compara por tipo; hay nodos que publican el booleano como string.
            condition = ["or", condition, ["=", ["fact", name], str(value).lower()]]
        rows = await self._query("nodes", condition)
        certnames: list[str] = []
        for row in rows:
            # v3 devolvía `name`; v4 usa `certname`.
            certname = row.get("certname") or row.get("name")
            if isinstance(certname, str) and certname:
                certnames.append(certname)
        return certnames
