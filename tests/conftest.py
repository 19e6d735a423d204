"""Shared fixtures: in-memory collaborators for the lookup pipeline."""

from __future__ import annotations

import os
from typing import Any

import pytest

from core.domain.errors import SourceUnavailableError
from core.domain.models import FactSet
from core.services.lookup_pipeline import LookupOptions, LookupSources

DOMAINS = [".rc.fas.harvard.edu", ".rc.domain"]


class FakeFactStore:
    def __init__(
        self,
        records: dict[str, dict[str, Any]] | None = None,
        *,
        down: bool = False,
    ) -> None:
        self.records = records or {}
        self.down = down
        self.lookups: list[str] = []
        self.node_queries: list[tuple[str, Any]] = []

    async def lookup(self, fqdn: str) -> FactSet | None:
        self.lookups.append(fqdn)
        if self.down:
            raise SourceUnavailableError("puppetdb", "connection refused")
        record = self.records.get(fqdn)
        return FactSet(dict(record)) if record is not None else None

    async def nodes_with_fact(self, name: str, value: Any) -> list[str]:
        self.node_queries.append((name, value))
        if self.down:
            raise SourceUnavailableError("puppetdb", "connection refused")
        accepted = [value]
        if isinstance(value, bool):
            accepted.append(str(value).lower())
        return [
            certname
            for certname, facts in self.records.items()
            if any(type(facts.get(name)) is type(v) and facts.get(name) == v for v in accepted)
        ]


class FakeProvisioning:
    def __init__(self, systems: dict[str, dict[str, Any]] | None = None, *, down: bool = False) -> None:
        self.systems = systems or {}
        self.down = down
        self.calls: list[str] = []

    async def find_system(self, fqdn: str) -> FactSet:
        self.calls.append(fqdn)
        if self.down:
            raise SourceUnavailableError("cobbler", "timed out")
        return FactSet(dict(self.systems.get(fqdn, {})))


class FakeRack:
    def __init__(self, racks: dict[str, dict[str, Any]] | None = None) -> None:
        self.racks = racks or {}
        self.calls: list[str] = []

    async def lookup(self, hostname: str) -> FactSet:
        self.calls.append(hostname)
        return FactSet(dict(self.racks.get(hostname, {})))


class FakeDns:
    def __init__(
        self,
        ptr: dict[str, str] | None = None,
        cnames: dict[str, str] | None = None,
    ) -> None:
        self.ptr = ptr or {}
        self.cnames = cnames or {}
        self.reverse_calls: list[str] = []
        self.cname_calls: list[str] = []

    async def reverse(self, address: str) -> str | None:
        self.reverse_calls.append(address)
        return self.ptr.get(address)

    async def cname(self, host: str) -> str | None:
        self.cname_calls.append(host)
        return self.cnames.get(host)


def make_sources(
    *,
    facts: dict[str, dict[str, Any]] | None = None,
    systems: dict[str, dict[str, Any]] | None = None,
    racks: dict[str, dict[str, Any]] | None = None,
    ptr: dict[str, str] | None = None,
    cnames: dict[str, str] | None = None,
    puppetdb_down: bool = False,
    cobbler_down: bool = False,
) -> LookupSources:
    return LookupSources(
        fact_store=FakeFactStore(facts, down=puppetdb_down),
        provisioning=FakeProvisioning(systems, down=cobbler_down),
        rack=FakeRack(racks),
        dns=FakeDns(ptr, cnames),
    )


@pytest.fixture
def options() -> LookupOptions:
    return LookupOptions(domains=list(DOMAINS), vnc_base_port=5900)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep developer `.env` files and WHATIS_* variables out of the tests."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for key in list(os.environ):
        if key.startswith("WHATIS_"):
            monkeypatch.delenv(key, raising=False)
