from .audit_log import (
    AUDIT_LOG_CAPACITY,
    AuditAction,
    AuditLogEntry,
    AuditModule,
    LogDescriptor,
    NewAuditLogEntry,
    format_timestamp,
    parse_timestamp,
)
from .bill import TOTAL_HOUSEHOLDS, Bill
from .facility import FACILITY_COUNTERS, FacilityUsageRecord, TopUpRecord
from .package_record import PackageRecord
from .user import User, UserRole

__all__ = [
    "AUDIT_LOG_CAPACITY",
    "AuditAction",
    "AuditLogEntry",
    "AuditModule",
    "LogDescriptor",
    "NewAuditLogEntry",
    "format_timestamp",
    "parse_timestamp",
    "TOTAL_HOUSEHOLDS",
    "Bill",
    "FACILITY_COUNTERS",
    "FacilityUsageRecord",
    "TopUpRecord",
    "PackageRecord",
    "User",
    "UserRole",
]
