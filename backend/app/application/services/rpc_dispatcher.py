"""Server side of the single-endpoint RPC used by the remote backend.

Maps an ``action`` name plus a camelCase JSON body onto the repository
ports. Request bodies are validated with the shared record schemas, so a
malformed body raises ``pydantic.ValidationError`` before any write.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from app.application.interfaces import DataRepository, RecordRepository
from app.application.schemas import (
    AuditLogEntrySchema,
    BillSchema,
    DeleteRecordRequest,
    DeleteUserRequest,
    FacilityUsageSchema,
    NewAuditLogSchema,
    PackageSchema,
    SaveUserRequest,
    TopUpSchema,
    UserSchema,
)
from app.domain.exceptions import UnknownActionError

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[Any]]

SUCCESS = {"success": True}


class RpcDispatcher:
    """Routes RPC actions to a DataRepository."""

    def __init__(self, repository: DataRepository):
        self._repository = repository
        self._handlers: dict[str, Handler] = {
            "getUsers": self._get_users,
            "saveUser": self._save_user,
            "deleteUser": self._delete_user,
            "getAuditLogs": self._get_audit_logs,
            "addAuditLog": self._add_audit_log,
        }
        self._register_collection("Bill", "Bills", repository.bills, BillSchema)
        self._register_collection("TopUp", "TopUps", repository.top_ups, TopUpSchema)
        self._register_collection(
            "FacilityUsage", "FacilityUsages", repository.facility_usages, FacilityUsageSchema
        )
        self._register_collection("Package", "Packages", repository.packages, PackageSchema)

    @property
    def actions(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(self, action: str | None, body: dict[str, Any] | None = None) -> Any:
        """Run ``action`` and return its JSON-ready result.

        Raises:
            UnknownActionError: ``action`` is missing or not served.
            pydantic.ValidationError: The body does not match the action.
            RepositoryError: The storage backend failed.
        """
        handler = self._handlers.get(action or "")
        if handler is None:
            raise UnknownActionError(action)
        logger.debug("Dispatching %s", action)
        return await handler(body or {})

    def _register_collection(
        self,
        singular: str,
        plural: str,
        repository: RecordRepository,
        schema: type[Any],
    ) -> None:
        async def get_all(_: dict[str, Any]) -> list[dict[str, Any]]:
            return [schema.from_entity(r).to_wire() for r in await repository.get_all()]

        async def save(body: dict[str, Any]) -> dict[str, bool]:
            await repository.save(schema.model_validate(body).to_entity())
            return SUCCESS

        async def delete(body: dict[str, Any]) -> dict[str, bool]:
            await repository.delete(DeleteRecordRequest.model_validate(body).id)
            return SUCCESS

        self._handlers[f"get{plural}"] = get_all
        self._handlers[f"save{singular}"] = save
        self._handlers[f"delete{singular}"] = delete

    # ── Users ────────────────────────────────────────────────────────

    async def _get_users(self, _: dict[str, Any]) -> list[dict[str, Any]]:
        users = await self._repository.users.get_all()
        return [UserSchema.from_entity(u).to_wire() for u in users]

    async def _save_user(self, body: dict[str, Any]) -> dict[str, bool]:
        request = SaveUserRequest.model_validate(body)
        await self._repository.users.save(request.user.to_entity(), is_new=request.is_new)
        return SUCCESS

    async def _delete_user(self, body: dict[str, Any]) -> dict[str, bool]:
        await self._repository.users.delete(DeleteUserRequest.model_validate(body).username)
        return SUCCESS

    # ── Audit log ────────────────────────────────────────────────────

    async def _get_audit_logs(self, _: dict[str, Any]) -> list[dict[str, Any]]:
        entries = await self._repository.audit_logs.list_logs()
        return [AuditLogEntrySchema.from_entity(e).to_wire() for e in entries]

    async def _add_audit_log(self, body: dict[str, Any]) -> dict[str, Any]:
        entry = NewAuditLogSchema.model_validate(body).to_entity()
        stored = await self._repository.audit_logs.append_log(entry)
        return AuditLogEntrySchema.from_entity(stored).to_wire()
