from .dns_records import (
    DomainRecordCache,
    DnsConfig,
    DnsPythonResolver,
    RecordKind,
)

__all__ = [
    "DomainRecordCache",
    "DnsConfig",
    "DnsPythonResolver",
    "RecordKind",
]
