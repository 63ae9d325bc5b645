from .record_repositories import (
    SQLAlchemyBillRepository,
    SQLAlchemyFacilityUsageRepository,
    SQLAlchemyPackageRepository,
    SQLAlchemyRecordRepository,
    SQLAlchemyTopUpRepository,
    SQLAlchemyUserRepository,
)
from .audit_log_repository import SQLAlchemyAuditLogRepository
from .data_repository import build_sql_repository

__all__ = [
    "SQLAlchemyBillRepository",
    "SQLAlchemyFacilityUsageRepository",
    "SQLAlchemyPackageRepository",
    "SQLAlchemyRecordRepository",
    "SQLAlchemyTopUpRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyAuditLogRepository",
    "build_sql_repository",
]
