"""Adapter over the platform's name resolution services."""

import ipaddress
import socket
from typing import Optional, Union

import dns.name
import dns.resolver

from dns_lookup_mcp.types import IPAddr

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# Static host table consulted before DNS
HOSTS_PATH = "/etc/hosts"

# Address families accepted by the IP lookups
IP_NETWORKS = {
    "ip": socket.AF_UNSPEC,
    "ip4": socket.AF_INET,
    "ip6": socket.AF_INET6,
}

# Protocols searched in the services database, in order, per network
PORT_NETWORKS = {
    "": ("tcp", "udp"),
    "tcp": ("tcp",),
    "tcp4": ("tcp",),
    "tcp6": ("tcp",),
    "udp": ("udp",),
    "udp4": ("udp",),
    "udp6": ("udp",),
}

MAX_PORT = 65535


class ResolverError(Exception):
    """Lookup failure raised by the adapter itself rather than by dnspython."""


class UnknownNetworkError(ResolverError):
    def __init__(self, network: str):
        super().__init__(f"unknown network {network}")
        self.network = network


class NoSuitableAddressError(ResolverError):
    def __init__(self, host: str):
        super().__init__(f"address {host}: no suitable address found")


class InvalidPortError(ResolverError):
    def __init__(self, network: str, service: str):
        super().__init__(f"lookup {network}/{service}: invalid port")


class UnknownPortError(ResolverError):
    def __init__(self, network: str, service: str):
        super().__init__(f"lookup {network}/{service}: unknown port")


def _split_zone(address: str) -> IPAddr:
    addr, _, zone = address.partition("%")
    return IPAddr(ip=ipaddress.ip_address(addr), zone=zone)


def _in_family(address: str, family: int) -> bool:
    if family == socket.AF_UNSPEC:
        return True
    version = 4 if family == socket.AF_INET else 6
    return _split_zone(address).ip.version == version


def _parse_port(service: str) -> Optional[int]:
    """Parse a numeric service, or return None when it names a service.

    An empty service is port 0. A leading sign is accepted.
    """
    digits = service[1:] if service[:1] in ("+", "-") else service
    if not digits:
        return 0
    if not (digits.isascii() and digits.isdigit()):
        return None
    port = int(digits)
    return -port if service.startswith("-") else port


def read_hosts(path: str, host: str) -> list[str]:
    """Addresses listed for a host in a hosts(5) file, in file order."""
    name = host.rstrip(".").lower()
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError:
        return []

    addrs = []
    for line in lines:
        fields = line.split("#", 1)[0].split()
        if len(fields) < 2:
            continue
        if name not in (alias.rstrip(".").lower() for alias in fields[1:]):
            continue
        try:
            _split_zone(fields[0])
        except ValueError:
            continue
        addrs.append(fields[0])
    return addrs


class PlatformResolver:
    """Thin wrapper around the system-configured dnspython resolver.

    Address lookups answer IP literals directly and consult the hosts
    file before DNS. Every other method issues exactly one resolution and
    lets the resolver's exceptions propagate. Timeouts and nameservers are
    whatever the system configuration gives the default resolver.
    """

    def __init__(
        self,
        resolver: Optional[dns.resolver.Resolver] = None,
        hosts_path: Optional[str] = None,
    ):
        self._resolver = resolver
        self._hosts_path = hosts_path

    @property
    def resolver(self) -> dns.resolver.Resolver:
        if self._resolver is None:
            return dns.resolver.get_default_resolver()
        return self._resolver

    @property
    def hosts_path(self) -> str:
        return self._hosts_path or HOSTS_PATH

    def _family(self, network: str) -> int:
        try:
            return IP_NETWORKS[network]
        except KeyError:
            raise UnknownNetworkError(network) from None

    def _addresses(self, host: str, family: int = socket.AF_UNSPEC) -> list[str]:
        try:
            _split_zone(host)
        except ValueError:
            pass
        else:
            if not _in_family(host, family):
                raise NoSuitableAddressError(host)
            return [host]

        addrs = [a for a in read_hosts(self.hosts_path, host) if _in_family(a, family)]
        if addrs:
            return addrs
        return list(self.resolver.resolve_name(host, family=family).addresses())

    def lookup_addr(self, addr: str) -> list:
        return list(self.resolver.resolve_address(addr))

    def lookup_cname(self, host: str) -> dns.name.Name:
        answer = self.resolver.resolve(host, "A", raise_on_no_answer=False)
        return answer.canonical_name

    def lookup_host(self, host: str) -> list[str]:
        return self._addresses(host)

    def lookup_ip(self, network: str, host: str) -> list[IPAddress]:
        family = self._family(network)
        return [_split_zone(a).ip for a in self._addresses(host, family)]

    def lookup_ip_addr(self, host: str) -> list[IPAddr]:
        return [_split_zone(a) for a in self._addresses(host)]

    def lookup_netip(self, network: str, host: str) -> list[IPAddress]:
        return self.lookup_ip(network, host)

    def lookup_mx(self, name: str) -> list:
        return list(self.resolver.resolve(name, "MX"))

    def lookup_ns(self, name: str) -> list:
        return list(self.resolver.resolve(name, "NS"))

    def lookup_srv(self, service: str, proto: str, name: str) -> tuple[dns.name.Name, list]:
        if service or proto:
            name = f"_{service}._{proto}.{name}"
        answer = self.resolver.resolve(name, "SRV")
        return answer.canonical_name, list(answer)

    def lookup_txt(self, name: str) -> list:
        return list(self.resolver.resolve(name, "TXT"))

    def lookup_port(self, network: str, service: str) -> int:
        port = _parse_port(service)
        if port is None:
            port = self._service_port(network, service)
        if not 0 <= port <= MAX_PORT:
            raise InvalidPortError(network, service)
        return port

    def _service_port(self, network: str, service: str) -> int:
        protocols = PORT_NETWORKS.get(network)
        if protocols is None:
            raise UnknownNetworkError(network)

        for proto in protocols:
            try:
                return socket.getservbyname(service.lower(), proto)
            except OSError:
                continue
        raise UnknownPortError(network, service)
