"""The catalog of measured DNS lookups."""

from typing import Optional

from dns_lookup_mcp.measure import measure, to_records, to_strings
from dns_lookup_mcp.resolver import PlatformResolver
from dns_lookup_mcp.types import (
    LookupAddrResponse,
    LookupCNAMEResponse,
    LookupHostResponse,
    LookupIPAddrResponse,
    LookupIPResponse,
    LookupMXResponse,
    LookupNetIPResponse,
    LookupNSResponse,
    LookupPortResponse,
    LookupSRVResponse,
    LookupTXTResponse,
    MXRecord,
    NSRecord,
    SRVRecord,
)


def _txt_string(rdata) -> str:
    return b"".join(rdata.strings).decode("utf-8", errors="replace")


class DNS:
    """Stateless lookup handler.

    Each method performs one resolution through the platform resolver and
    returns a response whose ``err`` and ``duration`` are always populated.
    Failures never raise; the payload is left at its empty value instead.
    """

    def __init__(self, resolver: Optional[PlatformResolver] = None):
        self.resolver = resolver or PlatformResolver()

    def lookup_addr(self, addr: str) -> LookupAddrResponse:
        def op():
            names = self.resolver.lookup_addr(addr)
            return LookupAddrResponse(names=[r.target.to_text() for r in names])

        return measure(LookupAddrResponse, op)

    def lookup_cname(self, host: str) -> LookupCNAMEResponse:
        def op():
            return LookupCNAMEResponse(cname=self.resolver.lookup_cname(host).to_text())

        return measure(LookupCNAMEResponse, op)

    def lookup_host(self, host: str) -> LookupHostResponse:
        return measure(
            LookupHostResponse,
            lambda: LookupHostResponse(addrs=self.resolver.lookup_host(host)),
        )

    def lookup_ip(self, network: str, host: str) -> LookupIPResponse:
        def op():
            ips = self.resolver.lookup_ip(network, host)
            return LookupIPResponse(ips=to_strings(ips))

        return measure(LookupIPResponse, op)

    def lookup_ip_addr(self, host: str) -> LookupIPAddrResponse:
        def op():
            ips = self.resolver.lookup_ip_addr(host)
            return LookupIPAddrResponse(ips=to_strings(ips))

        return measure(LookupIPAddrResponse, op)

    def lookup_mx(self, name: str) -> LookupMXResponse:
        def op():
            records = self.resolver.lookup_mx(name)
            return LookupMXResponse(records=to_records(records, MXRecord.from_rdata))

        return measure(LookupMXResponse, op)

    def lookup_ns(self, name: str) -> LookupNSResponse:
        def op():
            records = self.resolver.lookup_ns(name)
            return LookupNSResponse(records=to_records(records, NSRecord.from_rdata))

        return measure(LookupNSResponse, op)

    def lookup_netip(self, network: str, host: str) -> LookupNetIPResponse:
        def op():
            ips = self.resolver.lookup_netip(network, host)
            return LookupNetIPResponse(ips=to_strings(ips))

        return measure(LookupNetIPResponse, op)

    def lookup_port(self, network: str, service: str) -> LookupPortResponse:
        return measure(
            LookupPortResponse,
            lambda: LookupPortResponse(port=self.resolver.lookup_port(network, service)),
        )

    def lookup_srv(self, service: str, proto: str, name: str) -> LookupSRVResponse:
        def op():
            cname, records = self.resolver.lookup_srv(service, proto, name)
            return LookupSRVResponse(
                cname=cname.to_text(),
                records=to_records(records, SRVRecord.from_rdata),
            )

        return measure(LookupSRVResponse, op)

    def lookup_txt(self, name: str) -> LookupTXTResponse:
        def op():
            records = self.resolver.lookup_txt(name)
            return LookupTXTResponse(records=[_txt_string(r) for r in records])

        return measure(LookupTXTResponse, op)
