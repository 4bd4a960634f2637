from .cache import DomainRecordCache
from .errors import NoDataForKind, ResolutionError, ResolutionFailed
from .models import RECORD_LABELS, LookupResult, MXRecord, RecordKind
from .resolver import DnsConfig, DnsPythonResolver, Resolver, create_dns_resolver

__all__ = [
    "DomainRecordCache",
    "DnsConfig",
    "DnsPythonResolver",
    "Resolver",
    "create_dns_resolver",
    "LookupResult",
    "MXRecord",
    "RecordKind",
    "RECORD_LABELS",
    "ResolutionError",
    "ResolutionFailed",
    "NoDataForKind",
]
