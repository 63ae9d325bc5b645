"""Bundle of every repository port a dashboard client needs."""

from dataclasses import dataclass

from app.domain.entities import Bill, FacilityUsageRecord, PackageRecord, TopUpRecord

from .audit_log_repository import AuditLogRepository
from .record_repository import RecordRepository, UserRepository


@dataclass(frozen=True)
class DataRepository:
    """One storage backend, seen through its six collection ports."""

    bills: RecordRepository[Bill]
    users: UserRepository
    top_ups: RecordRepository[TopUpRecord]
    facility_usages: RecordRepository[FacilityUsageRecord]
    packages: RecordRepository[PackageRecord]
    audit_logs: AuditLogRepository
