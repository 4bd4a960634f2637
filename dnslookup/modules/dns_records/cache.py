from __future__ import annotations

import dataclasses as dc
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from loguru import logger

from dnslookup.modules.dns_records.errors import (
    NoDataForKind,
    ResolutionError,
    ResolutionFailed,
)
from dnslookup.modules.dns_records.models import (
    RECORD_LABELS,
    IPAddress,
    LookupResult,
    MXRecord,
    RecordKind,
)
from dnslookup.modules.dns_records.resolver import DnsConfig, DnsPythonResolver, Resolver

T = TypeVar("T")


@dc.dataclass(frozen=True, slots=True)
class _Cached(Generic[T]):
    value: T


class _RecordSlot(Generic[T]):
    '''
    One cached record kind. `state` is None until a lookup succeeds and is
    assigned exactly once afterwards, so it can be read without the gate.
    The gate is held for the whole fetch, making concurrent first calls
    wait for the one lookup in flight instead of issuing their own.
    '''
    __slots__ = ("kind", "empty", "coerce", "gate", "state")

    def __init__(self, kind: RecordKind, empty: T, coerce: Callable[[Any], T]) -> None:
        self.kind = kind
        self.empty = empty
        self.coerce = coerce
        self.gate = threading.Lock()
        self.state: _Cached[T] | None = None

    def publish(self, value: T) -> T:
        # caller holds the gate
        if self.state is None:
            self.state = _Cached(value)
        return self.state.value


class DomainRecordCache:
    '''
    Looks up and caches the A, CNAME, MX, NS, PTR and TXT records of a
    single domain.

    Each record kind is fetched at most once: the first successful lookup
    is kept for the lifetime of the instance, a failed lookup is not cached
    and is retried on the next call. The instance can be shared between
    threads.

    Example::

        records = DomainRecordCache("example.com")
        records.get_a_records()
        records.get_all_records()
    '''

    def __init__(
        self,
        domain: str,
        resolver: Resolver | None = None,
        *,
        config: DnsConfig | None = None,
    ) -> None:
        self._domain = domain
        self.resolver: Resolver = (
            resolver if resolver is not None else DnsPythonResolver(config)
        )
        self._slots: dict[RecordKind, _RecordSlot[Any]] = {
            RecordKind.A: _RecordSlot(RecordKind.A, (), tuple),
            RecordKind.CNAME: _RecordSlot(RecordKind.CNAME, "", str),
            RecordKind.MX: _RecordSlot(RecordKind.MX, (), tuple),
            RecordKind.NS: _RecordSlot(RecordKind.NS, (), tuple),
            RecordKind.PTR: _RecordSlot(RecordKind.PTR, (), tuple),
            RecordKind.TXT: _RecordSlot(RecordKind.TXT, (), tuple),
        }
        self._fetchers: dict[RecordKind, Callable[[str], Any]] = {
            RecordKind.A: self.resolver.resolve_addresses,
            RecordKind.CNAME: self.resolver.resolve_canonical_name,
            RecordKind.MX: self.resolver.resolve_mail_exchange,
            RecordKind.NS: self.resolver.resolve_name_servers,
            RecordKind.TXT: self.resolver.resolve_text,
        }

    @property
    def domain(self) -> str:
        return self._domain

    def __repr__(self) -> str:
        cached = ", ".join(k.value for k in RecordKind if self.is_cached(k))
        return f"<DomainRecordCache {self._domain!r} cached=[{cached}]>"

    def is_cached(self, kind: RecordKind) -> bool:
        return self._slots[kind].state is not None

    def _cached_result(self, slot: _RecordSlot[T], value: T) -> LookupResult[T]:
        if value:
            return LookupResult(slot.kind, value)
        return LookupResult(slot.kind, value, NoDataForKind(slot.kind, self._domain))

    def _fetch(self, slot: _RecordSlot[T]) -> LookupResult[T]:
        '''
        Returns the cached value of `slot` or resolves it while holding
        the slot gate.

        Parameters
        ----------
        slot : _RecordSlot[T]

        Returns
        -------
        LookupResult[T]
        '''
        if (state := slot.state) is not None:
            return self._cached_result(slot, state.value)

        with slot.gate:
            if (state := slot.state) is not None:
                logger.debug(f"{slot.kind.value} for {self._domain} resolved while waiting")
                return self._cached_result(slot, state.value)

            logger.debug(f"Resolving {slot.kind.value} records for {self._domain}")
            try:
                value = slot.coerce(self._fetchers[slot.kind](self._domain))
            except NoDataForKind:
                value = slot.empty
            except ResolutionError as exc:
                logger.debug(f"Lookup failed, {slot.kind.value} left uncached: {exc}")
                return LookupResult(slot.kind, slot.empty, exc)

            value = slot.publish(value)
        return self._cached_result(slot, value)

    def _fetch_pointers(self) -> LookupResult[tuple[str, ...]]:
        '''
        Reverse resolves every address of the domain, fetching the
        addresses first if they are not cached yet. Each address is
        looked up once; an address whose lookup fails contributes no
        names.

        The PTR slot is only cached when the addresses are cached and no
        reverse lookup failed, otherwise the names found are returned and
        the next call tries again.
        '''
        slot: _RecordSlot[tuple[str, ...]] = self._slots[RecordKind.PTR]
        if (state := slot.state) is not None:
            return self._cached_result(slot, state.value)

        with slot.gate:
            if (state := slot.state) is not None:
                return self._cached_result(slot, state.value)

            addresses = self.lookup(RecordKind.A)
            failure: ResolutionError | None = None
            if isinstance(addresses.error, ResolutionFailed):
                failure = addresses.error

            pointers: list[str] = []
            for address in addresses.value:
                try:
                    pointers.extend(self.resolver.resolve_reverse(str(address)))
                except NoDataForKind:
                    continue
                except ResolutionError as exc:
                    logger.debug(f"Reverse lookup for {address} failed: {exc}")
                    failure = failure or exc

            value = tuple(pointers)
            if failure is not None:
                return LookupResult(slot.kind, value, failure)

            value = slot.publish(value)
        return self._cached_result(slot, value)

    def lookup(self, kind: RecordKind) -> LookupResult[Any]:
        '''
        Returns the records of `kind` along with the reason they may be
        empty, following the same caching rules as the `get_*` accessors.

        Parameters
        ----------
        kind : RecordKind

        Returns
        -------
        LookupResult
        '''
        if kind is RecordKind.PTR:
            return self._fetch_pointers()
        return self._fetch(self._slots[kind])

    def lookup_all(self) -> dict[str, LookupResult[Any]]:
        return {label: self.lookup(kind) for kind, label in RECORD_LABELS.items()}

    def get_a_records(self) -> tuple[IPAddress, ...]:
        '''
        Returns the IP addresses of the domain, empty if the lookup failed.
        '''
        return self.lookup(RecordKind.A).value

    def get_cname_records(self) -> str:
        '''
        Returns the canonical name of the domain, empty if the lookup failed.
        '''
        return self.lookup(RecordKind.CNAME).value

    def get_mx_records(self) -> tuple[MXRecord, ...]:
        return self.lookup(RecordKind.MX).value

    def get_ns_records(self) -> tuple[str, ...]:
        return self.lookup(RecordKind.NS).value

    def get_ptr_records(self) -> tuple[str, ...]:
        '''
        Returns the names found by reverse resolving each address of
        the domain.
        '''
        return self.lookup(RecordKind.PTR).value

    def get_txt_records(self) -> tuple[str, ...]:
        return self.lookup(RecordKind.TXT).value

    def get_all_records(self) -> dict[str, Any]:
        '''
        Collects every record kind into one mapping. All six keys are always
        present; a kind whose lookup failed maps to an empty value.

        Returns
        -------
        dict[str, Any]
            _Keyed by "A records", "CNAME records", "MX records",
            "NS records", "PTR records" and "TXT records"_
        '''
        return {label: self.lookup(kind).value for kind, label in RECORD_LABELS.items()}
