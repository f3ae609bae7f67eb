"""Shared fixtures: a fake dnspython resolver fed with real rdata."""

import socket

import dns.name
import dns.rdata
import dns.resolver
import pytest

from dns_lookup_mcp.lookups import DNS
from dns_lookup_mcp.resolver import PlatformResolver


def rdata(rdtype: str, text: str):
    return dns.rdata.from_text("IN", rdtype, text)


class FakeAnswer(list):
    """Iterable answer with the canonical name dnspython attaches."""

    def __init__(self, rdatas, canonical_name: str):
        super().__init__(rdatas)
        self.canonical_name = dns.name.from_text(canonical_name)


class FakeHostAnswers:
    def __init__(self, addresses):
        self._addresses = addresses

    def addresses(self):
        return iter(self._addresses)


class FakeResolver:
    """Answers from a fixed table keyed by (query type, name).

    Anything missing from the table raises NXDOMAIN, like a real resolver
    asked about a name that does not exist.
    """

    def __init__(self, table=None):
        self.table = table or {}
        self.calls = []

    def _answer(self, key, qname):
        self.calls.append(key)
        value = self.table.get(key)
        if value is None:
            raise dns.resolver.NXDOMAIN(qnames=[dns.name.from_text(qname)])
        if isinstance(value, Exception):
            raise value
        return value

    def resolve(self, qname, rdtype, raise_on_no_answer=True):
        return self._answer((rdtype, qname), qname)

    def resolve_address(self, addr):
        return self._answer(("PTR", addr), addr)

    def resolve_name(self, name, family=socket.AF_UNSPEC):
        return self._answer((family, name), name)


@pytest.fixture
def fake_resolver():
    return FakeResolver()


@pytest.fixture
def dns_handler(fake_resolver):
    return DNS(PlatformResolver(fake_resolver))


@pytest.fixture(autouse=True)
def hosts_file(tmp_path, monkeypatch):
    """Point the hosts table at an empty per-test file."""
    path = tmp_path / "hosts"
    path.write_text("")
    monkeypatch.setattr("dns_lookup_mcp.resolver.HOSTS_PATH", str(path))
    return path
