"""Selección de los facts a mostrar en modo texto."""

from __future__ import annotations

from typing import Sequence

from core.domain.models import FactSet


def facts_to_display(
    facts: FactSet,
    default_facts: Sequence[str],
    *,
    show_all: bool = False,
) -> list[str]:
    """Lista ordenada de nombres a imprimir.

    `show_all` descarta la lista curada y usa todas las claves del FactSet.
    """

    if show_all:
        return facts.keys()

    names = list(default_facts)
    if facts.flag("kvm_production"):
        names += ["hypervisor", "vms", "kvm_vlans"]
    if facts.get("virtual") == "kvm":
        names += ["hypervisor", "kvm_pool", "console"]
    if facts.flag("rcnfs_node"):
        names += ["rcnfs_node", "hosted_filesystems"]
    if facts.get("warranty_end") is not None:
        names.append("warranty_end")

    # `hypervisor` puede llegar dos veces.
    return list(dict.fromkeys(names))
