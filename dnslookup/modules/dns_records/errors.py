from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dnslookup.modules.dns_records.models import RecordKind


class ResolutionError(Exception):
    '''
    Base error for a record lookup, tagged with the record kind
    and the name that was queried.

    Parameters
    ----------
    kind : RecordKind
        _The record kind being resolved_
    name : str
        _The domain name or address that was queried_
    reason : str
        _A human readable reason_
    '''

    def __init__(self, kind: RecordKind, name: str, reason: str = "") -> None:
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(self.message)

    @property
    def message(self) -> str:
        base = f"{self.kind.value} lookup for {self.name} failed"
        if self.reason:
            return f"{base}: {self.reason}"
        return base


class ResolutionFailed(ResolutionError):
    '''
    The resolver could not answer (NXDOMAIN, timeout, no nameservers,
    malformed input). The original exception is kept as `__cause__`.
    '''


class NoDataForKind(ResolutionError):
    '''
    The resolver answered but there are no records of this kind.
    '''

    @property
    def message(self) -> str:
        return f"No {self.kind.value} records for {self.name}"
