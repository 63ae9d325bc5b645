from .bill import BillModel
from .user import UserModel
from .facility import TopUpModel, FacilityUsageModel
from .package_record import PackageModel
from .audit_log import AuditLogModel

__all__ = [
    "BillModel",
    "UserModel",
    "TopUpModel",
    "FacilityUsageModel",
    "PackageModel",
    "AuditLogModel",
]
