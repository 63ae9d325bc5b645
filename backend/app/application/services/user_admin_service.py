"""Use cases for account administration (ADMIN only)."""

from dataclasses import replace
from functools import partial

from app.application.interfaces import UserRepository
from app.application.services.mutation_pipeline import MutationPipeline, PendingMutation
from app.application.services.session import ActorSession
from app.domain.entities import AuditAction, AuditModule, LogDescriptor, User, UserRole
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError, RecordValidationError


class UserAdminService:
    """Create, edit and remove dashboard accounts through the mutation pipeline."""

    def __init__(self, users: UserRepository, pipeline: MutationPipeline, session: ActorSession):
        self._users = users
        self._pipeline = pipeline
        self._session = session

    async def list_users(self) -> list[User]:
        self._session.require_admin()
        return await self._users.get_all()

    async def request_create(
        self,
        username: str,
        password: str,
        role: UserRole | str = UserRole.GUEST,
        name: str | None = None,
    ) -> PendingMutation:
        self._session.require_admin()
        username = (username or "").strip()
        if not username:
            raise RecordValidationError("username", "is required")
        if not password:
            raise RecordValidationError("password", "is required")
        if any(u.username == username for u in await self._users.get_all()):
            raise DuplicateEntityError("User", "username", username)

        user = User(username=username, password=password, role=_parse_role(role), name=name or None)
        descriptor = LogDescriptor(
            module=AuditModule.USER,
            action=AuditAction.CREATE,
            description=f"Created account {username}",
            diff=f"role: {user.role.value}",
        )
        return self._pipeline.request_action(
            partial(self._users.save, user, is_new=True),
            descriptor,
            f"Create the account {username} ({user.role.value})?",
        )

    async def request_update(
        self,
        username: str,
        *,
        role: UserRole | str | None = None,
        name: str | None = None,
        password: str | None = None,
    ) -> PendingMutation:
        """Queue an account edit. A blank password keeps the current one.

        Editing your own account refreshes the session once the change is saved.
        """
        self._session.require_admin()
        existing = next((u for u in await self._users.get_all() if u.username == username), None)
        if existing is None:
            raise EntityNotFoundError("User", username)

        updated = replace(
            existing,
            role=existing.role if role is None else _parse_role(role),
            name=existing.name if name is None else (name or None),
            password=password or existing.password,
        )

        async def save_and_refresh() -> None:
            await self._users.save(updated)
            self._session.refresh(updated)

        diff = None
        if updated.role != existing.role:
            diff = f"role: {existing.role.value} -> {updated.role.value}"
        descriptor = LogDescriptor(
            module=AuditModule.USER,
            action=AuditAction.UPDATE,
            description=f"Updated account {username}",
            diff=diff,
        )
        return self._pipeline.request_action(
            save_and_refresh, descriptor, f"Save the changes to account {username}?"
        )

    async def request_delete(self, username: str) -> PendingMutation:
        actor = self._session.require_admin()
        if username == actor.username:
            raise RecordValidationError("username", "you cannot delete your own account")

        descriptor = LogDescriptor(
            module=AuditModule.USER,
            action=AuditAction.DELETE,
            description=f"Deleted account {username}",
        )
        return self._pipeline.request_action(
            partial(self._users.delete, username),
            descriptor,
            f"Delete the account {username}?",
        )


def _parse_role(role: UserRole | str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        raise RecordValidationError("role", f"unknown role '{role}'") from None
