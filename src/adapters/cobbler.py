"""Cliente Cobbler (XML-RPC) para el fallback de aprovisionamiento.

El payload XML-RPC se serializa con `xmlrpc.client` y viaja por httpx, así
comparte timeouts/TLS con el resto de adaptadores.
"""

from __future__ import annotations

import logging
import xmlrpc.client
from typing import Any
from xml.parsers.expat import ExpatError

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import SourceUnavailableError
from core.domain.models import CommentMetadata, FactSet
from core.interfaces.sources import ProvisioningSource
from core.services.decoding import parse_mapping

logger = logging.getLogger(__name__)

SOURCE = "cobbler"


def _interface_value(system: dict[str, Any], key: str) -> Any:
    interfaces = system.get("interfaces")
    if not isinstance(interfaces, dict):
        return None
    eth0 = interfaces.get("eth0")
    if not isinstance(eth0, dict):
        return None
    return eth0.get(key)


def system_to_facts(system: dict[str, Any]) -> FactSet:
    """Facts base (hostname/IP/MAC) más la metadata del comentario."""

    facts = FactSet(
        {
            "hostname": system.get("hostname"),
            "ipaddress": system.get("ip_address_eth0") or _interface_value(system, "ip_address"),
            "macaddress": system.get("mac_address_eth0") or _interface_value(system, "mac_address"),
        }
    )

    comment = parse_mapping(system.get("comment"))
    if comment:
        try:
            metadata = CommentMetadata.model_validate(
                {k: str(v) for k, v in comment.items() if v is not None}
            )
        except ValueError:
            logger.debug("cobbler: ignoring malformed comment for %s", system.get("hostname"))
        else:
            facts = facts.merged(metadata.as_facts())
    return facts


class CobblerClient(ProvisioningSource):
    """`find_system_by_dns_name` sobre la API XML-RPC de Cobbler."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_async_client(
            self._settings,
            extra_headers={"Content-Type": "text/xml", "Accept": "text/xml"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, *params: Any) -> Any:
        body = xmlrpc.client.dumps(params, methodname=method, allow_none=True)
        try:
            resp = await self._client.post(self._settings.cobbler_url, content=body.encode("utf-8"))
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(SOURCE, f"{type(exc).__name__}: {exc}") from exc

        if resp.status_code != 200:
            raise SourceUnavailableError(SOURCE, f"HTTP {resp.status_code} on {method}")
        try:
            result, _ = xmlrpc.client.loads(resp.text, use_builtin_types=True)
        except xmlrpc.client.Fault as exc:
            raise SourceUnavailableError(SOURCE, f"fault {exc.faultCode}: {exc.faultString}") from exc
        except (ExpatError, xmlrpc.client.ResponseError) as exc:
            raise SourceUnavailableError(SOURCE, f"malformed response on {method}") from exc
        return result[0] if result else None

    async def find_system(self, fqdn: str) -> FactSet:
        system = await self._call("find_system_by_dns_name", fqdn)
        if not isinstance(system, dict) or not system:
            return FactSet.empty()
        logger.debug("cobbler: found system for %s", fqdn)
        return system_to_facts(system)
