'''
Per-domain DNS record lookups with a thread-safe, fetch-once cache.
'''
from loguru import logger

from dnslookup.modules.dns_records import (
    RECORD_LABELS,
    DnsConfig,
    DnsPythonResolver,
    DomainRecordCache,
    LookupResult,
    MXRecord,
    NoDataForKind,
    RecordKind,
    ResolutionError,
    ResolutionFailed,
    Resolver,
)

__version__ = "0.1.0"

# silent when used as a library, see core._logging.configure_lib_logger
logger.disable("dnslookup")

__all__ = [
    "DomainRecordCache",
    "DnsConfig",
    "DnsPythonResolver",
    "Resolver",
    "LookupResult",
    "MXRecord",
    "RecordKind",
    "RECORD_LABELS",
    "ResolutionError",
    "ResolutionFailed",
    "NoDataForKind",
]
