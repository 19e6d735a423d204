"""Cliente rackfacts de Racktables (ubicación física).

Fuente suplementaria: timeout corto y cualquier fallo devuelve un FactSet
vacío. Nunca interrumpe el lookup.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import FactSet, RackFacts
from core.interfaces.sources import RackInventory
from core.services.decoding import safe_yaml
from core.services.resolver import short_hostname

logger = logging.getLogger(__name__)


class RacktablesClient(RackInventory):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_async_client(
            self._settings,
            base_url=self._settings.racktables_url.rstrip("/"),
            timeout_seconds=self._settings.rack_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def lookup(self, hostname: str) -> FactSet:
        short = short_hostname(hostname)
        try:
            resp = await self._client.get(f"/rackfacts/systems/{short}")
        except httpx.TimeoutException:
            logger.warning("racktables: timed out looking up %s", short)
            return FactSet.empty()
        except httpx.HTTPError as exc:
            logger.warning("racktables: %s: %s", type(exc).__name__, exc)
            return FactSet.empty()

        if resp.status_code != 200:
            logger.debug("racktables: HTTP %s for %s", resp.status_code, short)
            return FactSet.empty()

        body = safe_yaml(resp.text)
        if not isinstance(body, dict):
            logger.warning("racktables: undecodable body for %s", short)
            return FactSet.empty()

        try:
            rack = RackFacts.model_validate(body)
        except ValueError:
            logger.warning("racktables: unexpected fields for %s", short)
            return FactSet.empty()
        return rack.as_facts()
