"""Response type definitions for DNS lookups."""

import ipaddress
from dataclasses import asdict, dataclass, field
from datetime import timedelta
from typing import Any, Optional, Union


@dataclass
class MXRecord:
    """A single mail exchange record."""

    host: str
    preference: int

    @classmethod
    def from_rdata(cls, rdata) -> "MXRecord":
        return cls(host=rdata.exchange.to_text(), preference=rdata.preference)


@dataclass
class NSRecord:
    """A single name server record."""

    host: str

    @classmethod
    def from_rdata(cls, rdata) -> "NSRecord":
        return cls(host=rdata.target.to_text())


@dataclass
class SRVRecord:
    """A single service record."""

    target: str
    port: int
    priority: int
    weight: int

    @classmethod
    def from_rdata(cls, rdata) -> "SRVRecord":
        return cls(
            target=rdata.target.to_text(),
            port=rdata.port,
            priority=rdata.priority,
            weight=rdata.weight,
        )


@dataclass
class IPAddr:
    """An IP address with an optional IPv6 zone."""

    ip: Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
    zone: str = ""

    def __str__(self) -> str:
        if self.zone:
            return f"{self.ip}%{self.zone}"
        return str(self.ip)


@dataclass
class CommonFields:
    """Fields shared by every lookup response.

    ``err`` is empty when the lookup succeeded. ``duration`` is always set
    and covers the whole call, including failed ones.
    """

    err: str = ""
    duration: timedelta = field(default_factory=timedelta)

    def set_common_fields(self, duration: timedelta, err: Optional[BaseException]) -> None:
        self.duration = duration
        if err is not None:
            self.err = str(err) or type(err).__name__

    def to_dict(self) -> dict[str, Any]:
        """Render the response for the host, with duration in milliseconds."""
        data = asdict(self)
        data["duration"] = self.duration / timedelta(milliseconds=1)
        return data


@dataclass
class LookupAddrResponse(CommonFields):
    names: list[str] = field(default_factory=list)


@dataclass
class LookupCNAMEResponse(CommonFields):
    cname: str = ""


@dataclass
class LookupHostResponse(CommonFields):
    addrs: list[str] = field(default_factory=list)


@dataclass
class LookupIPResponse(CommonFields):
    ips: list[str] = field(default_factory=list)


@dataclass
class LookupIPAddrResponse(CommonFields):
    ips: list[str] = field(default_factory=list)


@dataclass
class LookupMXResponse(CommonFields):
    records: list[MXRecord] = field(default_factory=list)


@dataclass
class LookupNSResponse(CommonFields):
    records: list[NSRecord] = field(default_factory=list)


@dataclass
class LookupNetIPResponse(CommonFields):
    ips: list[str] = field(default_factory=list)


@dataclass
class LookupPortResponse(CommonFields):
    port: int = 0


@dataclass
class LookupSRVResponse(CommonFields):
    cname: str = ""
    records: list[SRVRecord] = field(default_factory=list)


@dataclass
class LookupTXTResponse(CommonFields):
    records: list[str] = field(default_factory=list)
