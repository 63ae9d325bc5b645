"""Explicit actor context — who is logged in and what they may do.

The logged-in user is persisted under the ``APP_SESSION`` slot (password
stripped) so a restart restores the actor without asking again. Role
checks here are advisory; repositories never enforce them.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import replace

from pydantic import ValidationError

from app.application.interfaces import KeyValueStore, UserRepository
from app.application.schemas import UserSchema
from app.domain.entities import User, UserRole
from app.domain.exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)

SESSION_KEY = "APP_SESSION"


class ActorSession:
    """Holds the current actor and persists it as a session token."""

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._actor: User | None = None
        self._logout_listeners: list[Callable[[], None]] = []

    @property
    def current_actor(self) -> User | None:
        return self._actor

    @property
    def actor_name(self) -> str | None:
        return self._actor.display_name if self._actor else None

    @property
    def can_edit(self) -> bool:
        return self._actor is not None and self._actor.can_edit

    @property
    def is_admin(self) -> bool:
        return self._actor is not None and self._actor.is_admin

    def require_editor(self) -> User:
        if not self.can_edit:
            raise PermissionDeniedError(UserRole.MANAGER.value)
        return self._actor

    def require_admin(self) -> User:
        if not self.is_admin:
            raise PermissionDeniedError(UserRole.ADMIN.value)
        return self._actor

    def restore(self) -> User | None:
        """Load the persisted actor, discarding a token that no longer parses."""
        raw = self._store.get(SESSION_KEY)
        if raw is None:
            return None
        try:
            self._actor = UserSchema.model_validate(json.loads(raw)).to_entity()
        except (ValidationError, ValueError) as exc:
            logger.warning("Discarding unreadable session token: %s", exc)
            self._store.remove(SESSION_KEY)
            self._actor = None
        return self._actor

    def login(self, user: User) -> None:
        self._actor = replace(user, password=None)
        self._persist()
        logger.info("Logged in as %s (%s)", self._actor.display_name, self._actor.role.value)

    def refresh(self, user: User) -> None:
        """Replace the actor after the logged-in user edited their own account."""
        if self._actor is None or self._actor.username != user.username:
            return
        self._actor = replace(user, password=None)
        self._persist()

    def logout(self) -> None:
        if self._actor is not None:
            logger.info("Logged out %s", self._actor.display_name)
        self._actor = None
        self._store.remove(SESSION_KEY)
        for listener in list(self._logout_listeners):
            listener()

    def add_logout_listener(self, listener: Callable[[], None]) -> None:
        self._logout_listeners.append(listener)

    def _persist(self) -> None:
        token = UserSchema.from_entity(self._actor).to_wire()
        self._store.set(SESSION_KEY, json.dumps(token, ensure_ascii=False))


class AuthenticationService:
    """Checks credentials against the user repository and starts a session."""

    def __init__(self, users: UserRepository, session: ActorSession):
        self._users = users
        self._session = session

    async def authenticate(self, username: str, password: str) -> User:
        # RepositoryError propagates: the caller reports the backend as unreachable.
        users = await self._users.get_all()
        for user in users:
            if user.username == username and user.password == password:
                self._session.login(user)
                return self._session.current_actor
        logger.info("Rejected login for %s", username)
        raise AuthenticationError(username)
