from .rpc_client import RpcClient
from .remote_repository import (
    RemoteAuditLogRepository,
    RemoteCollectionRepository,
    RemoteUserRepository,
    build_remote_repository,
)

__all__ = [
    "RpcClient",
    "RemoteAuditLogRepository",
    "RemoteCollectionRepository",
    "RemoteUserRepository",
    "build_remote_repository",
]
