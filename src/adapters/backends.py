"""Construcción de los adaptadores reales para el pipeline."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from adapters.cobbler import CobblerClient
from adapters.dns_resolver import DnsResolver
from adapters.puppetdb import PuppetDBClient
from adapters.racktables import RacktablesClient
from core.config import AppSettings
from core.services.lookup_pipeline import LookupSources


@asynccontextmanager
async def open_sources(settings: AppSettings) -> AsyncIterator[LookupSources]:
    """Abre un cliente por backend y los cierra al salir."""

    puppetdb = PuppetDBClient(settings)
    cobbler = CobblerClient(settings)
    racktables = RacktablesClient(settings)
    try:
        yield LookupSources(
            fact_store=puppetdb,
            provisioning=cobbler,
            rack=racktables,
            dns=DnsResolver(settings),
        )
    finally:
        await puppetdb.aclose()
        await cobbler.aclose()
        await racktables.aclose()
