from .confirmation_gate import ConfirmationGate
from .session import SESSION_KEY, ActorSession, AuthenticationService
from .mutation_pipeline import MutationOutcome, MutationPipeline, PendingMutation, PipelineState
from .audit_log_viewer import AuditLogRow, AuditLogViewer
from .electricity_service import ElectricityService
from .bill_statistics import BillStatisticsService, HouseholdShare, MonthComparison, RecordHighs, YearOverYear
from .package_service import PackageService
from .facility_service import FacilityService
from .user_admin_service import UserAdminService
from .rpc_dispatcher import RpcDispatcher

__all__ = [
    "ConfirmationGate",
    "SESSION_KEY",
    "ActorSession",
    "AuthenticationService",
    "MutationOutcome",
    "MutationPipeline",
    "PendingMutation",
    "PipelineState",
    "AuditLogRow",
    "AuditLogViewer",
    "ElectricityService",
    "BillStatisticsService",
    "HouseholdShare",
    "MonthComparison",
    "RecordHighs",
    "YearOverYear",
    "PackageService",
    "FacilityService",
    "UserAdminService",
    "RpcDispatcher",
]
