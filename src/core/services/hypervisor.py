"""Localización del hipervisor KVM que aloja una VM.

Recorre secuencialmente los hosts con `kvm_production=true` en PuppetDB y
busca la VM en su fact `kvm_vms`. Gana el primer hipervisor que la lista.
"""

from __future__ import annotations

import logging

from core.domain.errors import SourceUnavailableError
from core.domain.models import FactSet, HypervisorRecord
from core.interfaces.sources import FactStore
from core.services.decoding import parse_vm_list

logger = logging.getLogger(__name__)


def is_kvm_guest(facts: FactSet) -> bool:
    return facts.get("virtual") == "kvm"


def console_uri(hypervisor: str, offset: object, base_port: int) -> str | None:
    try:
        port = base_port + int(str(offset).strip())
    except (TypeError, ValueError):
        return None
    return f"vnc://{hypervisor}:{port}"


def hypervisor_record(
    *,
    hypervisor: str,
    hypervisor_facts: FactSet,
    guest: str,
    vnc_base_port: int = 5900,
) -> HypervisorRecord:
    """Compone el registro a partir de `kvm_<guest>_pool` y `kvm_<guest>_vnc`."""

    pool = hypervisor_facts.get(f"kvm_{guest}_pool")
    offset = hypervisor_facts.get(f"kvm_{guest}_vnc")
    return HypervisorRecord(
        hypervisor=hypervisor,
        kvm_pool=str(pool) if pool is not None else None,
        console=console_uri(hypervisor, offset, vnc_base_port) if offset is not None else None,
    )


async def locate_hypervisor(
    *,
    facts: FactSet,
    fact_store: FactStore,
    vnc_base_port: int = 5900,
) -> HypervisorRecord | None:
    """Busca qué hipervisor lista la VM descrita por `facts`.

    No hace ninguna consulta si `virtual` no es `"kvm"`.
    """

    if not is_kvm_guest(facts):
        return None

    guest = facts.get("hostname")
    if not isinstance(guest, str) or not guest:
        logger.debug("kvm guest without hostname fact; skipping hypervisor scan")
        return None

    try:
        hypervisors = await fact_store.nodes_with_fact("kvm_production", True)
    except SourceUnavailableError as exc:
        logger.warning("%s", exc)
        return None

    for name in hypervisors:
        try:
            hv_facts = await fact_store.lookup(name)
        except SourceUnavailableError as exc:
            logger.warning("skipping hypervisor %s: %s", name, exc)
            continue
        if hv_facts is None:
            logger.warning("skipping hypervisor %s: no facts", name)
            continue

        vms = parse_vm_list(hv_facts.get("kvm_vms"))
        if guest not in vms:
            continue

        logger.debug("%s is hosted on %s", guest, name)
        return hypervisor_record(
            hypervisor=name,
            hypervisor_facts=hv_facts,
            guest=guest,
            vnc_base_port=vnc_base_port,
        )

    logger.debug("no hypervisor lists %s", guest)
    return None
