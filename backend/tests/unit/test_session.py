"""Unit tests for ActorSession and AuthenticationService."""

import json

import pytest

from app.application.services import SESSION_KEY, ActorSession, AuthenticationService
from app.domain.entities import User, UserRole
from app.domain.exceptions import AuthenticationError, PermissionDeniedError
from app.infrastructure.local_store import build_local_repository
from app.infrastructure.storage.json_file_store import InMemoryKeyValueStore


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


def test_login_persists_token_without_password(store: InMemoryKeyValueStore):
    session = ActorSession(store)
    session.login(User(username="manager", password="manager", role=UserRole.MANAGER, name="PM"))

    token = json.loads(store.get(SESSION_KEY))
    assert token["username"] == "manager"
    assert token["password"] is None
    assert session.actor_name == "PM"
    assert session.can_edit
    assert not session.is_admin


def test_restore_from_token(store: InMemoryKeyValueStore):
    ActorSession(store).login(User(username="Steven", role=UserRole.ADMIN, name="Kai"))

    restored = ActorSession(store)
    actor = restored.restore()

    assert actor.username == "Steven"
    assert restored.is_admin


def test_restore_discards_garbage_token(store: InMemoryKeyValueStore):
    store.set(SESSION_KEY, "{broken")
    session = ActorSession(store)

    assert session.restore() is None
    assert store.get(SESSION_KEY) is None


def test_logout_clears_token_and_notifies(store: InMemoryKeyValueStore):
    session = ActorSession(store)
    session.login(User(username="manager", role=UserRole.MANAGER))
    closed = []
    session.add_logout_listener(lambda: closed.append(True))

    session.logout()

    assert session.current_actor is None
    assert session.actor_name is None
    assert store.get(SESSION_KEY) is None
    assert closed == [True]


def test_guest_cannot_edit(store: InMemoryKeyValueStore):
    session = ActorSession(store)
    session.login(User(username="visitor", role=UserRole.GUEST))

    with pytest.raises(PermissionDeniedError):
        session.require_editor()


def test_refresh_only_applies_to_current_actor(store: InMemoryKeyValueStore):
    session = ActorSession(store)
    session.login(User(username="Steven", role=UserRole.ADMIN, name="Kai"))

    session.refresh(User(username="manager", role=UserRole.GUEST, name="Other"))
    assert session.actor_name == "Kai"

    session.refresh(User(username="Steven", role=UserRole.ADMIN, name="Kai Lin"))
    assert session.actor_name == "Kai Lin"
    assert json.loads(store.get(SESSION_KEY))["name"] == "Kai Lin"


@pytest.mark.asyncio
async def test_authenticate_against_seeded_users(store: InMemoryKeyValueStore):
    repository = build_local_repository(store)
    session = ActorSession(store)
    auth = AuthenticationService(repository.users, session)

    user = await auth.authenticate("manager", "manager")

    assert user.role is UserRole.MANAGER
    assert user.password is None
    assert session.actor_name == "Property Manager"


@pytest.mark.asyncio
async def test_authenticate_rejects_bad_password(store: InMemoryKeyValueStore):
    repository = build_local_repository(store)
    auth = AuthenticationService(repository.users, ActorSession(store))

    with pytest.raises(AuthenticationError):
        await auth.authenticate("manager", "wrong")
