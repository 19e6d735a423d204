"""Tests for the dnspython-backed resolver."""

import asyncio
from types import SimpleNamespace

import dns.exception
import dns.resolver
import pytest

from adapters.dns_resolver import DnsResolver
from core.config import AppSettings
from core.domain.errors import SourceUnavailableError


def _rdata(name):
    return SimpleNamespace(target=SimpleNamespace(to_text=lambda: name))


class StubResolver:
    def __init__(self, *, ptr=None, cname=None, error=None):
        self.ptr = ptr
        self.cname = cname
        self.error = error
        self.lifetime = None
        self.calls = []

    async def resolve_address(self, address):
        self.calls.append(("PTR", address))
        if self.error:
            raise self.error
        return [_rdata(self.ptr)]

    async def resolve(self, host, rdtype, search=None):
        self.calls.append((rdtype, host, search))
        if self.error:
            raise self.error
        return [_rdata(self.cname)]


class TestDnsResolver:
    def test_lifetime_from_settings(self):
        stub = StubResolver()
        DnsResolver(AppSettings(dns_timeout_seconds=3.0), resolver=stub)
        assert stub.lifetime == 3.0

    def test_reverse(self):
        stub = StubResolver(ptr="web01.rc.domain.")
        resolver = DnsResolver(AppSettings(), resolver=stub)
        assert asyncio.run(resolver.reverse("10.0.0.1")) == "web01.rc.domain."

    def test_cname_short_name_uses_search_list(self):
        stub = StubResolver(cname="websrv.rc.fas.harvard.edu.")
        resolver = DnsResolver(AppSettings(), resolver=stub)

        assert asyncio.run(resolver.cname("www")) == "websrv.rc.fas.harvard.edu."
        assert stub.calls == [("CNAME", "www", True)]

    @pytest.mark.parametrize("error", [dns.resolver.NXDOMAIN(), dns.resolver.NoAnswer()])
    def test_not_found_is_none(self, error):
        resolver = DnsResolver(AppSettings(), resolver=StubResolver(error=error))
        assert asyncio.run(resolver.cname("www.rc.domain")) is None
        assert asyncio.run(resolver.reverse("10.0.0.1")) is None

    def test_timeout_is_unavailable(self):
        resolver = DnsResolver(AppSettings(), resolver=StubResolver(error=dns.exception.Timeout()))
        with pytest.raises(SourceUnavailableError) as excinfo:
            asyncio.run(resolver.cname("www"))
        assert excinfo.value.source == "dns"
