from __future__ import annotations

import contextlib
import dataclasses as dc
import ipaddress
from collections.abc import Iterator
from typing import Protocol

import dns.exception
import dns.name
import dns.resolver
import dns.reversename
from loguru import logger

from dnslookup.modules.dns_records.errors import ResolutionFailed
from dnslookup.modules.dns_records.models import IPAddress, MXRecord, RecordKind


class Resolver(Protocol):
    '''
    The lookups a DomainRecordCache needs. Every method either returns
    the (possibly empty) records or raises a `ResolutionError`.
    '''

    def resolve_addresses(self, name: str) -> tuple[IPAddress, ...]: ...

    def resolve_canonical_name(self, name: str) -> str: ...

    def resolve_mail_exchange(self, name: str) -> tuple[MXRecord, ...]: ...

    def resolve_name_servers(self, name: str) -> tuple[str, ...]: ...

    def resolve_reverse(self, address: str) -> tuple[str, ...]: ...

    def resolve_text(self, name: str) -> tuple[str, ...]: ...


@dc.dataclass(slots=True)
class DnsConfig:
    '''
    Options for DNS lookups.
    '''
    filename: str = "/etc/resolv.conf"
    configure: bool = True
    lifetime: float = 5.0
    tcp: bool = False
    nameservers: tuple[str, ...] = ()
    include_ipv6: bool = True


def create_dns_resolver(options: DnsConfig | None = None) -> dns.resolver.Resolver:
    options = options or DnsConfig()
    resolver = dns.resolver.Resolver(
        configure=options.configure,
        filename=options.filename,
    )
    resolver.lifetime = options.lifetime
    if options.nameservers:
        resolver.nameservers = list(options.nameservers)
    return resolver


def decode_txt(strings: tuple[bytes, ...]) -> str:
    return "".join(s.decode("utf-8", errors="replace") for s in strings)


class DnsPythonResolver:
    '''
    A `Resolver` backed by the synchronous dnspython stub resolver.

    dnspython's `NoAnswer` is reported as an empty result, every other
    `DNSException` is raised as a `ResolutionFailed`.
    '''

    def __init__(
        self,
        options: DnsConfig | None = None,
        *,
        resolver: dns.resolver.Resolver | None = None,
    ) -> None:
        self.options = options or DnsConfig()
        self.resolver = resolver if resolver is not None else create_dns_resolver(self.options)

    @contextlib.contextmanager
    def _translate_errors(self, kind: RecordKind, name: str) -> Iterator[None]:
        '''
        Converts dnspython failures into `ResolutionFailed`.

        Parameters
        ----------
        kind : RecordKind
        name : str
        '''
        try:
            yield
        except dns.resolver.NXDOMAIN as exc:
            raise ResolutionFailed(kind, name, "domain does not exist") from exc
        except dns.resolver.NoNameservers as exc:
            raise ResolutionFailed(kind, name, "no nameservers available") from exc
        except dns.exception.Timeout as exc:
            raise ResolutionFailed(kind, name, "timed out") from exc
        except dns.exception.DNSException as exc:
            raise ResolutionFailed(kind, name, str(exc) or type(exc).__name__) from exc

    def _query(self, name: str | dns.name.Name, rtype: str) -> dns.resolver.Answer:
        return self.resolver.resolve(
            name,
            rtype,
            tcp=self.options.tcp,
            raise_on_no_answer=False,
        )

    def _resolve_family(self, name: str, rtype: str) -> list[IPAddress]:
        with self._translate_errors(RecordKind.A, name):
            answer = self._query(name, rtype)
        return [ipaddress.ip_address(rdata.address) for rdata in answer]

    def resolve_addresses(self, name: str) -> tuple[IPAddress, ...]:
        rtypes = ["A", "AAAA"] if self.options.include_ipv6 else ["A"]
        addresses: list[IPAddress] = []
        failures: list[ResolutionFailed] = []
        for rtype in rtypes:
            try:
                addresses.extend(self._resolve_family(name, rtype))
            except ResolutionFailed as exc:
                logger.debug(f"{rtype} query for {name} failed: {exc}")
                failures.append(exc)

        if len(failures) == len(rtypes):
            raise failures[0]
        return tuple(addresses)

    def resolve_canonical_name(self, name: str) -> str:
        with self._translate_errors(RecordKind.CNAME, name):
            answer = self._query(name, "A")
        return answer.canonical_name.to_text()

    def resolve_mail_exchange(self, name: str) -> tuple[MXRecord, ...]:
        with self._translate_errors(RecordKind.MX, name):
            answer = self._query(name, "MX")
        return tuple(
            MXRecord(exchange=rdata.exchange.to_text(), preference=rdata.preference)
            for rdata in answer
        )

    def resolve_name_servers(self, name: str) -> tuple[str, ...]:
        with self._translate_errors(RecordKind.NS, name):
            answer = self._query(name, "NS")
        return tuple(rdata.target.to_text() for rdata in answer)

    def resolve_reverse(self, address: str) -> tuple[str, ...]:
        try:
            rev_name = dns.reversename.from_address(address)
        except (ValueError, dns.exception.SyntaxError) as exc:
            raise ResolutionFailed(RecordKind.PTR, address, "invalid IP address") from exc

        with self._translate_errors(RecordKind.PTR, address):
            answer = self._query(rev_name, "PTR")
        return tuple(rdata.target.to_text() for rdata in answer)

    def resolve_text(self, name: str) -> tuple[str, ...]:
        with self._translate_errors(RecordKind.TXT, name):
            answer = self._query(name, "TXT")
        return tuple(decode_txt(rdata.strings) for rdata in answer)
