"""Resolución DNS con dnspython (PTR y CNAME).

NXDOMAIN/NoAnswer son "no encontrado" (`None`); timeouts o servidores
caídos son `SourceUnavailableError`.
"""

from __future__ import annotations

import logging

import dns.asyncresolver
import dns.exception
import dns.resolver

from core.config import AppSettings
from core.domain.errors import SourceUnavailableError
from core.interfaces.sources import NameResolver

logger = logging.getLogger(__name__)

SOURCE = "dns"


class DnsResolver(NameResolver):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        resolver: dns.asyncresolver.Resolver | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._resolver = resolver or dns.asyncresolver.Resolver()
        self._resolver.lifetime = self._settings.dns_timeout_seconds

    async def reverse(self, address: str) -> str | None:
        try:
            answer = await self._resolver.resolve_address(address)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return None
        except dns.exception.DNSException as exc:
            raise SourceUnavailableError(SOURCE, f"PTR {address}: {exc}") from exc
        for rdata in answer:
            return rdata.target.to_text()
        return None

    async def cname(self, host: str) -> str | None:
        try:
            # Nombres cortos usan la lista `search` de resolv.conf.
            answer = await self._resolver.resolve(host, "CNAME", search="." not in host)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return None
        except dns.exception.DNSException as exc:
            raise SourceUnavailableError(SOURCE, f"CNAME {host}: {exc}") from exc
        for rdata in answer:
            return rdata.target.to_text()
        return None
