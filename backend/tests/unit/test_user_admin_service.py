"""Unit tests for UserAdminService."""

import pytest

from app.config import Settings
from app.domain.entities import AuditAction, User, UserRole
from app.domain.exceptions import (
    DuplicateEntityError,
    PermissionDeniedError,
    RecordValidationError,
)
from app.infrastructure.dependencies import build_dashboard
from app.infrastructure.storage.json_file_store import InMemoryKeyValueStore


@pytest.fixture
def dashboard():
    dashboard = build_dashboard(
        Settings(storage_backend="local", _env_file=None), store=InMemoryKeyValueStore()
    )
    dashboard.session.login(User(username="Steven", role=UserRole.ADMIN, name="Kai"))
    return dashboard


@pytest.mark.asyncio
async def test_create_user(dashboard):
    pending = await dashboard.users.request_create("guard", "secret", "GUEST", name="Night Guard")
    outcome = await dashboard.pipeline.confirm()

    assert pending.descriptor.action is AuditAction.CREATE
    assert outcome.log_entry.module == "user"
    assert outcome.log_entry.actor_name == "Kai"
    users = {u.username: u for u in await dashboard.users.list_users()}
    assert users["guard"].name == "Night Guard"


@pytest.mark.asyncio
async def test_create_requires_fields_and_unique_username(dashboard):
    with pytest.raises(RecordValidationError):
        await dashboard.users.request_create("  ", "secret")
    with pytest.raises(RecordValidationError):
        await dashboard.users.request_create("guard", "")
    with pytest.raises(DuplicateEntityError):
        await dashboard.users.request_create("manager", "secret")


@pytest.mark.asyncio
async def test_update_keeps_password_when_blank(dashboard):
    pending = await dashboard.users.request_update("manager", role=UserRole.GUEST, password="")
    await dashboard.pipeline.confirm()

    assert pending.descriptor.diff == "role: MANAGER -> GUEST"
    users = {u.username: u for u in await dashboard.users.list_users()}
    assert users["manager"].role is UserRole.GUEST
    assert users["manager"].password == "manager"


@pytest.mark.asyncio
async def test_editing_self_refreshes_session(dashboard):
    await dashboard.users.request_update("Steven", name="Kai Lin")
    await dashboard.pipeline.confirm()

    assert dashboard.session.actor_name == "Kai Lin"


@pytest.mark.asyncio
async def test_cannot_delete_self(dashboard):
    with pytest.raises(RecordValidationError):
        await dashboard.users.request_delete("Steven")


@pytest.mark.asyncio
async def test_delete_other_user(dashboard):
    await dashboard.users.request_delete("manager")
    await dashboard.pipeline.confirm()

    assert [u.username for u in await dashboard.users.list_users()] == ["Steven"]


@pytest.mark.asyncio
async def test_manager_cannot_administer_users(dashboard):
    dashboard.session.login(User(username="manager", role=UserRole.MANAGER))
    with pytest.raises(PermissionDeniedError):
        await dashboard.users.list_users()


@pytest.mark.asyncio
async def test_logout_cancels_open_prompt(dashboard):
    await dashboard.users.request_delete("manager")
    dashboard.session.logout()

    assert dashboard.pipeline.pending is None
