"""Contratos de las fuentes de inventario.

Por qué Protocol:
- Contrato estructural (duck typing): PuppetDB, Cobbler, Racktables y DNS
  son intercambiables por fakes en memoria en los tests.
- El pipeline no importa httpx, xmlrpc ni dnspython.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import FactSet


@runtime_checkable
class FactStore(Protocol):
    """Base de facts de gestión de configuración (PuppetDB).

    Reglas de diseño:
    - `lookup` devuelve `None` si el certname no tiene registros.
    - Los fallos de transporte se señalan con `SourceUnavailableError`.
    """

    async def lookup(self, fqdn: str) -> FactSet | None:
        """Facts del certname `fqdn`, o `None` si no existe."""

        ...

    async def nodes_with_fact(self, name: str, value: Any) -> list[str]:
        """Certnames cuyo fact `name` vale `value`.

        Un `value` booleano también casa con su forma string (`"true"`).
        """

        ...


@runtime_checkable
class ProvisioningSource(Protocol):
    """Sistema de aprovisionamiento (Cobbler)."""

    async def find_system(self, fqdn: str) -> FactSet:
        """Facts mínimos del sistema con ese nombre DNS; vacío si no hay."""

        ...


@runtime_checkable
class RackInventory(Protocol):
    """Inventario físico (Racktables). Nunca lanza: vacío ante cualquier fallo."""

    async def lookup(self, hostname: str) -> FactSet:
        ...


@runtime_checkable
class NameResolver(Protocol):
    """Resolución DNS que necesita el Resolver y el fallback por alias."""

    async def reverse(self, address: str) -> str | None:
        """Nombre PTR de `address`, o `None`."""

        ...

    async def cname(self, host: str) -> str | None:
        """Destino CNAME de `host`, o `None` si no es un alias."""

        ...
