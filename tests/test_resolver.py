"""Unit tests for host normalization and candidate FQDNs."""

import asyncio

import pytest

from conftest import DOMAINS, FakeDns
from core.domain.errors import ResolutionError, SourceUnavailableError
from core.services.resolver import candidate_fqdns, is_ip_address, normalize_host, short_hostname


class TestIsIpAddress:
    @pytest.mark.parametrize("value", ["10.0.0.1", "::1", "2001:db8::5", " 192.168.1.10 "])
    def test_ip_literals(self, value):
        assert is_ip_address(value)

    @pytest.mark.parametrize("value", ["web01", "web01.rc.domain", "10.0.0", "999.1.1.1", ""])
    def test_not_ip(self, value):
        assert not is_ip_address(value)


class TestNormalizeHost:
    def test_hostname_is_lowercased(self):
        dns = FakeDns()
        assert asyncio.run(normalize_host("WEB01.RC.Domain", dns)) == "web01.rc.domain"
        assert dns.reverse_calls == []

    def test_ip_is_reverse_resolved(self):
        dns = FakeDns(ptr={"10.0.0.5": "Web01.RC.fas.harvard.edu."})
        host = asyncio.run(normalize_host("10.0.0.5", dns))
        assert host == "web01.rc.fas.harvard.edu"
        assert dns.reverse_calls == ["10.0.0.5"]

    def test_ip_without_ptr_fails(self):
        with pytest.raises(ResolutionError) as excinfo:
            asyncio.run(normalize_host("10.9.9.9", FakeDns()))
        assert "10.9.9.9" in str(excinfo.value)

    def test_dns_outage_is_a_resolution_error(self):
        class DownDns(FakeDns):
            async def reverse(self, address):
                raise SourceUnavailableError("dns", "timeout")

        with pytest.raises(ResolutionError):
            asyncio.run(normalize_host("10.0.0.5", DownDns()))


class TestCandidateFqdns:
    def test_unqualified_uses_declared_order(self):
        assert candidate_fqdns("web01", DOMAINS) == [
            "web01.rc.fas.harvard.edu",
            "web01.rc.domain",
        ]

    def test_one_candidate_per_suffix(self):
        domains = [".a.example", ".b.example", ".c.example"]
        candidates = candidate_fqdns("db", domains)
        assert len(candidates) == len(domains)
        assert candidates[0] == "db.a.example"

    def test_qualified_name_is_tried_alone(self):
        assert candidate_fqdns("web01.rc.domain", DOMAINS) == ["web01.rc.domain"]

    def test_suffix_without_dot(self):
        assert candidate_fqdns("web01", ["example.org"]) == ["web01.example.org"]

    def test_no_domains(self):
        assert candidate_fqdns("web01", []) == []


def test_short_hostname():
    assert short_hostname("web01.rc.fas.harvard.edu") == "web01"
    assert short_hostname("web01") == "web01"
