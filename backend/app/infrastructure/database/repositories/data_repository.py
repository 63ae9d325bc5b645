"""Bundles the SQLAlchemy repositories that share one session."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import DataRepository
from app.domain.entities import AUDIT_LOG_CAPACITY

from .audit_log_repository import SQLAlchemyAuditLogRepository
from .record_repositories import (
    SQLAlchemyBillRepository,
    SQLAlchemyFacilityUsageRepository,
    SQLAlchemyPackageRepository,
    SQLAlchemyTopUpRepository,
    SQLAlchemyUserRepository,
)


def build_sql_repository(
    session: AsyncSession, *, audit_log_capacity: int = AUDIT_LOG_CAPACITY
) -> DataRepository:
    return DataRepository(
        bills=SQLAlchemyBillRepository(session),
        users=SQLAlchemyUserRepository(session),
        top_ups=SQLAlchemyTopUpRepository(session),
        facility_usages=SQLAlchemyFacilityUsageRepository(session),
        packages=SQLAlchemyPackageRepository(session),
        audit_logs=SQLAlchemyAuditLogRepository(session, capacity=audit_log_capacity),
    )
