from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    AuditLogModel,
    BillModel,
    FacilityUsageModel,
    PackageModel,
    TopUpModel,
    UserModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "AuditLogModel",
    "BillModel",
    "FacilityUsageModel",
    "PackageModel",
    "TopUpModel",
    "UserModel",
]
