"""Normalización del argumento y candidatos FQDN."""

from __future__ import annotations

import ipaddress
import logging
from typing import Sequence

from core.domain.errors import ResolutionError, SourceUnavailableError
from core.interfaces.sources import NameResolver

logger = logging.getLogger(__name__)


def is_ip_address(value: str) -> bool:
    try:
        ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    return True


def _clean_dns_name(name: str) -> str:
    return name.strip().rstrip(".").lower()


async def normalize_host(argument: str, resolver: NameResolver) -> str:
    """Devuelve el hostname canónico (minúsculas) para `argument`.

    Una IP se traduce por PTR; nunca se consulta PuppetDB con el literal.
    """

    argument = argument.strip()
    if not is_ip_address(argument):
        return argument.lower()

    try:
        name = await resolver.reverse(argument)
    except SourceUnavailableError as exc:
        logger.warning("%s", exc)
        raise ResolutionError(argument) from exc
    host = _clean_dns_name(name or "")
    if not host:
        raise ResolutionError(argument)
    logger.debug("reverse lookup %s -> %s", argument, host)
    return host


def candidate_fqdns(host: str, domains: Sequence[str]) -> list[str]:
    """Nombres a probar para `host`.

    Un nombre con punto ya está cualificado. Si no, un candidato por sufijo
    en el orden configurado (se recorre al revés anteponiendo cada uno).
    """

    if "." in host:
        return [host]

    fqdns: list[str] = []
    for domain in reversed(domains):
        suffix = domain if domain.startswith(".") else f".{domain}"
        fqdns.insert(0, f"{host}{suffix}")
    return fqdns


def short_hostname(host: str) -> str:
    return host.split(".", 1)[0]
