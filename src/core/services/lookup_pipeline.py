"""Host lookup orchestration.

The resolution chain is strictly sequential:

1. PuppetDB, once per candidate FQDN (first hit wins).
2. PuppetDB again, for the CNAME target of the normalized hostname.
3. Cobbler, once per candidate FQDN (first non-empty record wins),
   always followed by Racktables merged on top.

PuppetDB data always wins: Cobbler and Racktables are only consulted when
PuppetDB has no record for any candidate or alias. The accumulated FactSet
is passed explicitly between steps; nothing is kept in module state.
Unreachable backends do not abort the chain, they are recorded as warnings
so operators can tell "unknown host" from "backend down".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from core.domain.errors import NoInformationError, SourceUnavailableError
from core.domain.models import FactSet, HypervisorRecord
from core.interfaces.sources import FactStore, NameResolver, ProvisioningSource, RackInventory
from core.services.hypervisor import locate_hypervisor
from core.services.resolver import candidate_fqdns, normalize_host

logger = logging.getLogger(__name__)

SOURCE_PUPPETDB = "puppetdb"
SOURCE_PUPPETDB_CNAME = "puppetdb-cname"
SOURCE_FALLBACK = "cobbler+racktables"


@dataclass
class LookupSources:
    """Collaborators used by the pipeline."""

    fact_store: FactStore
    provisioning: ProvisioningSource
    rack: RackInventory
    dns: NameResolver


@dataclass
class LookupOptions:
    domains: Sequence[str] = ()
    vnc_base_port: int = 5900


@dataclass
class LookupResult:
    """Output of a pipeline invocation."""

    host: str
    candidates: list[str]
    facts: FactSet
    source: str
    hypervisor: HypervisorRecord | None = None
    warnings: list[str] = field(default_factory=list)
    unavailable: list[str] = field(default_factory=list)


@dataclass
class _Problems:
    warnings: list[str] = field(default_factory=list)
    unavailable: list[str] = field(default_factory=list)

    def source_down(self, exc: SourceUnavailableError) -> None:
        logger.warning("%s", exc)
        if exc.source not in self.unavailable:
            self.unavailable.append(exc.source)
        message = str(exc)
        if message not in self.warnings:
            self.warnings.append(message)


async def _fact_store_lookup(
    fqdn: str,
    fact_store: FactStore,
    problems: _Problems,
) -> FactSet | None:
    try:
        facts = await fact_store.lookup(fqdn)
    except SourceUnavailableError as exc:
        problems.source_down(exc)
        return None
    if facts is None:
        logger.debug("puppetdb: no record for %s", fqdn)
    return facts


async def _from_fact_store(
    candidates: Sequence[str],
    fact_store: FactStore,
    problems: _Problems,
) -> FactSet | None:
    for fqdn in candidates:
        facts = await _fact_store_lookup(fqdn, fact_store, problems)
        if facts is not None:
            return facts
    return None


async def _from_alias(
    host: str,
    sources: LookupSources,
    problems: _Problems,
) -> FactSet | None:
    try:
        target = await sources.dns.cname(host)
    except SourceUnavailableError as exc:
        problems.source_down(exc)
        return None
    if not target:
        logger.debug("dns: %s is not an alias", host)
        return None
    target = target.rstrip(".").lower()
    logger.debug("dns: %s is an alias for %s", host, target)
    return await _fact_store_lookup(target, sources.fact_store, problems)


async def _from_provisioning(
    candidates: Sequence[str],
    provisioning: ProvisioningSource,
    problems: _Problems,
) -> FactSet:
    for fqdn in candidates:
        try:
            facts = await provisioning.find_system(fqdn)
        except SourceUnavailableError as exc:
            problems.source_down(exc)
            continue
        if not facts.is_empty():
            return facts
        logger.debug("cobbler: no system for %s", fqdn)
    return FactSet.empty()


async def _with_rack(host: str, facts: FactSet, rack: RackInventory) -> FactSet:
    rack_facts = await rack.lookup(host)
    return facts.merged(rack_facts)


async def _with_hypervisor(
    facts: FactSet,
    fact_store: FactStore,
    options: LookupOptions,
) -> tuple[FactSet, HypervisorRecord | None]:
    record = await locate_hypervisor(
        facts=facts,
        fact_store=fact_store,
        vnc_base_port=options.vnc_base_port,
    )
    if record is None:
        return facts, None
    return facts.merged(record.as_facts()), record


async def lookup_host(
    argument: str,
    *,
    sources: LookupSources,
    options: LookupOptions,
) -> LookupResult:
    """Resolve `argument` (hostname or IP) to a merged FactSet.

    Raises `ResolutionError` for an IP without PTR record and
    `NoInformationError` when every source comes back empty.
    """

    problems = _Problems()

    host = await normalize_host(argument, sources.dns)
    candidates = candidate_fqdns(host, options.domains)
    logger.debug("candidates for %s: %s", host, candidates)

    source = SOURCE_PUPPETDB
    facts = await _from_fact_store(candidates, sources.fact_store, problems)

    if facts is None:
        source = SOURCE_PUPPETDB_CNAME
        facts = await _from_alias(host, sources, problems)

    if facts is None:
        source = SOURCE_FALLBACK
        facts = await _from_provisioning(candidates, sources.provisioning, problems)
        facts = await _with_rack(host, facts, sources.rack)
        if facts.is_empty():
            raise NoInformationError(host, problems.unavailable)

    facts, record = await _with_hypervisor(facts, sources.fact_store, options)

    return LookupResult(
        host=host,
        candidates=candidates,
        facts=facts,
        source=source,
        hypervisor=record,
        warnings=problems.warnings,
        unavailable=problems.unavailable,
    )
