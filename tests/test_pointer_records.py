"""Tests for reverse lookups of a domain's addresses."""

import ipaddress

from dnslookup.modules.dns_records import (
    DomainRecordCache,
    NoDataForKind,
    RecordKind,
    ResolutionFailed,
)

ADDRESSES = tuple(
    ipaddress.ip_address(a) for a in ("192.0.2.1", "192.0.2.2", "2001:db8::1")
)


def test_one_reverse_lookup_per_address(resolver):
    resolver.respond("A", ADDRESSES)
    records = DomainRecordCache("example.com", resolver)

    records.get_ptr_records()

    assert resolver.reverse_calls == ["192.0.2.1", "192.0.2.2", "2001:db8::1"]
    assert resolver.calls["A"] == 1


def test_cached_addresses_are_not_fetched_again(resolver):
    resolver.respond("A", ADDRESSES)
    records = DomainRecordCache("example.com", resolver)

    records.get_a_records()
    records.get_ptr_records()

    assert resolver.calls["A"] == 1
    assert len(resolver.reverse_calls) == len(ADDRESSES)


def test_names_follow_address_order(resolver):
    resolver.respond("A", ADDRESSES)
    resolver.reverse = {
        "192.0.2.2": ("two.example.", "deux.example."),
        "192.0.2.1": ("one.example.",),
        "2001:db8::1": ("six.example.",),
    }
    records = DomainRecordCache("example.com", resolver)

    assert records.get_ptr_records() == (
        "one.example.",
        "two.example.",
        "deux.example.",
        "six.example.",
    )


def test_pointers_are_cached(resolver):
    resolver.respond("A", ADDRESSES)
    resolver.reverse = {"192.0.2.1": ("one.example.",)}
    records = DomainRecordCache("example.com", resolver)

    first = records.get_ptr_records()
    second = records.get_ptr_records()

    assert second is first
    assert len(resolver.reverse_calls) == len(ADDRESSES)


def test_no_addresses_means_no_reverse_lookups(resolver):
    resolver.respond("A", ())
    records = DomainRecordCache("example.com", resolver)

    assert records.get_ptr_records() == ()
    assert resolver.reverse_calls == []
    assert records.is_cached(RecordKind.PTR)


def test_failed_address_lookup_leaves_pointers_uncached(resolver):
    resolver.respond(
        "A",
        ResolutionFailed(RecordKind.A, "example.com", "timed out"),
        ADDRESSES[:1],
    )
    resolver.reverse = {"192.0.2.1": ("one.example.",)}
    records = DomainRecordCache("example.com", resolver)

    assert records.get_ptr_records() == ()
    assert not records.is_cached(RecordKind.PTR)
    assert records.get_ptr_records() == ("one.example.",)
    assert records.is_cached(RecordKind.PTR)


def test_failed_reverse_lookup_is_skipped_and_retried(resolver):
    resolver.respond("A", ADDRESSES[:2])
    resolver.reverse = {
        "192.0.2.1": ResolutionFailed(RecordKind.PTR, "192.0.2.1", "timed out"),
        "192.0.2.2": ("two.example.",),
    }
    records = DomainRecordCache("example.com", resolver)

    result = records.lookup(RecordKind.PTR)

    assert result.value == ("two.example.",)
    assert isinstance(result.error, ResolutionFailed)
    assert not records.is_cached(RecordKind.PTR)

    resolver.reverse["192.0.2.1"] = ("one.example.",)
    assert records.get_ptr_records() == ("one.example.", "two.example.")
    assert resolver.reverse_calls == ["192.0.2.1", "192.0.2.2", "192.0.2.1", "192.0.2.2"]


def test_reverse_no_data_does_not_block_caching(resolver):
    resolver.respond("A", ADDRESSES[:2])
    resolver.reverse = {
        "192.0.2.1": NoDataForKind(RecordKind.PTR, "192.0.2.1"),
        "192.0.2.2": ("two.example.",),
    }
    records = DomainRecordCache("example.com", resolver)

    assert records.get_ptr_records() == ("two.example.",)
    assert records.is_cached(RecordKind.PTR)


def test_empty_pointers_report_no_data(resolver):
    resolver.respond("A", ADDRESSES[:1])
    records = DomainRecordCache("example.com", resolver)

    result = records.lookup(RecordKind.PTR)

    assert result.value == ()
    assert isinstance(result.error, NoDataForKind)
