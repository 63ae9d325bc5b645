from .local_repository import (
    JsonSlot,
    LocalAuditLogRepository,
    LocalCollectionRepository,
    LocalUserRepository,
    build_local_repository,
)

__all__ = [
    "JsonSlot",
    "LocalAuditLogRepository",
    "LocalCollectionRepository",
    "LocalUserRepository",
    "build_local_repository",
]
