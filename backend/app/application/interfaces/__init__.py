from .record_repository import RecordRepository, UserRepository
from .audit_log_repository import AuditLogRepository
from .key_value_store import KeyValueStore
from .data_repository import DataRepository

__all__ = [
    "RecordRepository",
    "UserRepository",
    "AuditLogRepository",
    "KeyValueStore",
    "DataRepository",
]
