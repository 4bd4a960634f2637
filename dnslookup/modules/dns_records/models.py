from __future__ import annotations

import dataclasses as dc
import enum
import ipaddress
from typing import Final, Generic, TypeVar

from dnslookup.modules.dns_records.errors import ResolutionError

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

T = TypeVar("T")


class RecordKind(enum.Enum):
    '''
    The record kinds a DomainRecordCache holds a slot for.
    '''
    A = "A"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    PTR = "PTR"
    TXT = "TXT"

    @property
    def label(self) -> str:
        return RECORD_LABELS[self]


# aggregate order, also the key order of `get_all_records`
RECORD_LABELS: Final[dict[RecordKind, str]] = {
    RecordKind.A: "A records",
    RecordKind.CNAME: "CNAME records",
    RecordKind.MX: "MX records",
    RecordKind.NS: "NS records",
    RecordKind.PTR: "PTR records",
    RecordKind.TXT: "TXT records",
}


@dc.dataclass(frozen=True, slots=True)
class MXRecord:
    '''
    A "Mail Exchange" DNS record.
    '''
    exchange: str
    preference: int

    def __str__(self) -> str:
        return f"{self.preference} {self.exchange}"


@dc.dataclass(frozen=True, slots=True)
class LookupResult(Generic[T]):
    '''
    The value of a record slot together with the reason it may be empty.

    `error` is None when records were found, a `NoDataForKind` when the
    resolver answered with nothing, or a `ResolutionFailed` when the
    lookup on this call failed.
    '''
    kind: RecordKind
    value: T
    error: ResolutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
