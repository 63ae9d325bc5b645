from .records import (
    AuditLogEntrySchema,
    BillSchema,
    CamelModel,
    DeleteRecordRequest,
    DeleteUserRequest,
    FacilityUsageSchema,
    NewAuditLogSchema,
    PackageSchema,
    SaveUserRequest,
    TopUpSchema,
    UserSchema,
)

__all__ = [
    "AuditLogEntrySchema",
    "BillSchema",
    "CamelModel",
    "DeleteRecordRequest",
    "DeleteUserRequest",
    "FacilityUsageSchema",
    "NewAuditLogSchema",
    "PackageSchema",
    "SaveUserRequest",
    "TopUpSchema",
    "UserSchema",
]
