"""Remote repository backend — each port operation becomes one RPC action."""

from typing import Any, TypeVar

from pydantic import ValidationError

from app.application.interfaces import (
    AuditLogRepository,
    DataRepository,
    RecordRepository,
    UserRepository,
)
from app.application.schemas import (
    AuditLogEntrySchema,
    BillSchema,
    FacilityUsageSchema,
    NewAuditLogSchema,
    PackageSchema,
    SaveUserRequest,
    TopUpSchema,
    UserSchema,
)
from app.domain.entities import AuditLogEntry, NewAuditLogEntry, User
from app.domain.exceptions import RepositoryError

from .rpc_client import RpcClient

T = TypeVar("T")


def _decode_list(action: str, schema: type[Any], payload: Any) -> list:
    if not isinstance(payload, list):
        raise RepositoryError("remote", f"{action} did not return a list")
    try:
        return [schema.model_validate(item).to_entity() for item in payload]
    except ValidationError as exc:
        raise RepositoryError("remote", f"{action} returned malformed records: {exc}") from exc


class RemoteCollectionRepository(RecordRepository[T]):
    """Proxies get/save/delete for one collection to the RPC endpoint."""

    def __init__(
        self,
        client: RpcClient,
        schema: type[Any],
        *,
        list_action: str,
        save_action: str,
        delete_action: str,
    ):
        self._client = client
        self._schema = schema
        self._list_action = list_action
        self._save_action = save_action
        self._delete_action = delete_action

    async def get_all(self) -> list[T]:
        payload = await self._client.call(self._list_action)
        return _decode_list(self._list_action, self._schema, payload)

    async def save(self, record: T) -> None:
        body = self._schema.from_entity(record).to_wire()
        await self._client.call(self._save_action, body)

    async def delete(self, record_id: str) -> None:
        await self._client.call(self._delete_action, {"id": record_id})


class RemoteUserRepository(UserRepository):
    def __init__(self, client: RpcClient):
        self._client = client

    async def get_all(self) -> list[User]:
        payload = await self._client.call("getUsers")
        return _decode_list("getUsers", UserSchema, payload)

    async def save(self, record: User, *, is_new: bool = False) -> None:
        request = SaveUserRequest(user=UserSchema.from_entity(record), is_new=is_new)
        await self._client.call("saveUser", request.to_wire())

    async def delete(self, record_id: str) -> None:
        await self._client.call("deleteUser", {"username": record_id})


class RemoteAuditLogRepository(AuditLogRepository):
    """The server assigns id and timestamp and enforces the capacity."""

    def __init__(self, client: RpcClient):
        self._client = client

    async def list_logs(self) -> list[AuditLogEntry]:
        payload = await self._client.call("getAuditLogs")
        return _decode_list("getAuditLogs", AuditLogEntrySchema, payload)

    async def append_log(self, entry: NewAuditLogEntry) -> AuditLogEntry:
        payload = await self._client.call(
            "addAuditLog", NewAuditLogSchema.from_entity(entry).to_wire()
        )
        try:
            return AuditLogEntrySchema.model_validate(payload).to_entity()
        except ValidationError as exc:
            raise RepositoryError("remote", f"addAuditLog returned malformed entry: {exc}") from exc


def build_remote_repository(client: RpcClient) -> DataRepository:
    """Wire every collection to the RPC endpoint behind ``client``."""
    return DataRepository(
        bills=RemoteCollectionRepository(
            client, BillSchema,
            list_action="getBills", save_action="saveBill", delete_action="deleteBill",
        ),
        users=RemoteUserRepository(client),
        top_ups=RemoteCollectionRepository(
            client, TopUpSchema,
            list_action="getTopUps", save_action="saveTopUp", delete_action="deleteTopUp",
        ),
        facility_usages=RemoteCollectionRepository(
            client, FacilityUsageSchema,
            list_action="getFacilityUsages",
            save_action="saveFacilityUsage",
            delete_action="deleteFacilityUsage",
        ),
        packages=RemoteCollectionRepository(
            client, PackageSchema,
            list_action="getPackages", save_action="savePackage", delete_action="deletePackage",
        ),
        audit_logs=RemoteAuditLogRepository(client),
    )
