"""Unit tests for PackageService cell edits."""

import pytest

from app.config import Settings
from app.domain.entities import AuditAction, User, UserRole
from app.domain.exceptions import RecordValidationError
from app.infrastructure.dependencies import build_dashboard
from app.infrastructure.storage.json_file_store import InMemoryKeyValueStore


@pytest.fixture
def dashboard():
    dashboard = build_dashboard(
        Settings(storage_backend="local", _env_file=None), store=InMemoryKeyValueStore()
    )
    dashboard.session.login(User(username="manager", role=UserRole.MANAGER))
    return dashboard


async def _count(dashboard, year: int, month: int) -> int | None:
    for record in await dashboard.packages.list_packages():
        if record.period_key == (year, month):
            return record.count
    return None


@pytest.mark.asyncio
async def test_unchanged_value_opens_nothing(dashboard):
    assert await dashboard.packages.request_set_count(2025, 11, "815") is None
    assert dashboard.pipeline.pending is None


@pytest.mark.asyncio
async def test_new_cell_is_a_create(dashboard):
    pending = await dashboard.packages.request_set_count(2025, 12, "30")
    assert pending.descriptor.action is AuditAction.CREATE
    assert pending.descriptor.diff == "(empty) -> 30"

    await dashboard.pipeline.confirm()
    assert await _count(dashboard, 2025, 12) == 30


@pytest.mark.asyncio
async def test_changed_cell_is_an_update(dashboard):
    pending = await dashboard.packages.request_set_count(2025, 11, 820)
    assert pending.descriptor.action is AuditAction.UPDATE
    assert pending.descriptor.diff == "815 -> 820"
    assert "Change: 815 -> 820" in pending.confirm_message

    await dashboard.pipeline.confirm()
    assert await _count(dashboard, 2025, 11) == 820
    assert len([r for r in await dashboard.packages.list_packages() if r.period_key == (2025, 11)]) == 1


@pytest.mark.asyncio
async def test_cleared_cell_is_a_delete(dashboard):
    pending = await dashboard.packages.request_set_count(2025, 11, "  ")
    assert pending.descriptor.action is AuditAction.DELETE
    assert pending.descriptor.diff == "815 -> (empty)"

    await dashboard.pipeline.confirm()
    assert await _count(dashboard, 2025, 11) is None


@pytest.mark.asyncio
async def test_clearing_empty_cell_is_a_noop(dashboard):
    assert await dashboard.packages.request_set_count(2026, 1, "") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["abc", "-1", "2.5"])
async def test_invalid_values_are_rejected(dashboard, value):
    with pytest.raises(RecordValidationError):
        await dashboard.packages.request_set_count(2025, 11, value)
    assert dashboard.pipeline.pending is None
