"""Unit tests for the local (key-value slot) repository backend."""

import json
import logging
from datetime import datetime, timedelta

import pytest

from app.domain.entities import AuditAction, Bill, NewAuditLogEntry, User, UserRole
from app.domain.exceptions import DuplicateEntityError, RepositoryError
from app.infrastructure.local_store import build_local_repository
from app.infrastructure.local_store.local_repository import BILLS_KEY, LOGS_KEY, USERS_KEY
from app.infrastructure.seed import default_dataset
from app.infrastructure.storage.json_file_store import InMemoryKeyValueStore, JsonFileKeyValueStore


class TickingClock:
    """Returns a strictly increasing time, one second per call."""

    def __init__(self):
        self._now = datetime(2025, 11, 26, 9, 0, 0)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store: InMemoryKeyValueStore):
    return build_local_repository(store, clock=TickingClock())


# ── Seeding ──


@pytest.mark.asyncio
async def test_empty_store_seeds_defaults_once(repository, store: InMemoryKeyValueStore):
    first = await repository.bills.get_all()
    persisted = store.get(BILLS_KEY)
    second = await repository.bills.get_all()

    assert first == default_dataset.default_bills()
    assert second == first
    assert persisted is not None
    assert store.get(BILLS_KEY) == persisted


@pytest.mark.asyncio
async def test_audit_log_seeds_to_empty(repository, store: InMemoryKeyValueStore):
    assert await repository.audit_logs.list_logs() == []
    assert json.loads(store.get(LOGS_KEY)) == []


@pytest.mark.asyncio
async def test_slots_use_camel_case_keys(repository, store: InMemoryKeyValueStore):
    await repository.bills.get_all()
    first = json.loads(store.get(BILLS_KEY))[0]
    assert "rocYear" in first
    assert "billingPeriod" in first
    assert "roc_year" not in first


# ── Self-healing ──


@pytest.mark.asyncio
async def test_unparseable_slot_is_reset_to_defaults(store: InMemoryKeyValueStore, caplog):
    store.set(USERS_KEY, "{not json")
    repository = build_local_repository(store)

    with caplog.at_level(logging.WARNING):
        users = await repository.users.get_all()

    assert users == default_dataset.default_users()
    assert "resetting to default" in caplog.text
    assert json.loads(store.get(USERS_KEY))[0]["username"] == "Steven"


@pytest.mark.asyncio
async def test_invalid_record_resets_slot(store: InMemoryKeyValueStore):
    store.set(BILLS_KEY, json.dumps([{"id": "x", "rocYear": 114, "month": 13, "usage": 1, "amount": 1}]))
    repository = build_local_repository(store)

    bills = await repository.bills.get_all()

    assert bills == default_dataset.default_bills()


@pytest.mark.asyncio
async def test_undecodable_slot_file_is_reset_to_defaults(tmp_path, caplog):
    (tmp_path / "APP_BILLS.json").write_bytes(b"\xff\xfe[garbage")
    repository = build_local_repository(JsonFileKeyValueStore(tmp_path))

    with caplog.at_level(logging.WARNING):
        bills = await repository.bills.get_all()

    assert bills == default_dataset.default_bills()
    assert "resetting to default" in caplog.text
    stored = json.loads((tmp_path / "APP_BILLS.json").read_text("utf-8"))
    assert len(stored) == len(default_dataset.default_bills())


# ── Upsert / delete ──


@pytest.mark.asyncio
async def test_save_same_id_twice_keeps_latest(repository):
    await repository.bills.save(Bill(id="b1", roc_year=114, month=11, usage=10960, amount=50309))
    await repository.bills.save(Bill(id="b1", roc_year=114, month=11, usage=11000, amount=51000))

    matches = [b for b in await repository.bills.get_all() if b.id == "b1"]

    assert len(matches) == 1
    assert matches[0].usage == 11000
    assert matches[0].amount == 51000


@pytest.mark.asyncio
async def test_delete_unknown_id_is_noop(repository, store: InMemoryKeyValueStore):
    before = await repository.bills.get_all()
    snapshot = store.get(BILLS_KEY)

    await repository.bills.delete("does-not-exist")

    assert await repository.bills.get_all() == before
    assert store.get(BILLS_KEY) == snapshot


@pytest.mark.asyncio
async def test_delete_removes_record(repository):
    await repository.bills.delete("17")
    assert "17" not in {b.id for b in await repository.bills.get_all()}


@pytest.mark.asyncio
async def test_saving_invalid_record_raises_repository_error(repository, store: InMemoryKeyValueStore):
    await repository.bills.get_all()
    before = store.get(BILLS_KEY)

    with pytest.raises(RepositoryError) as exc_info:
        await repository.bills.save(Bill(id="bad", roc_year=114, month=13, usage=1, amount=1))

    assert exc_info.value.backend == "local"
    assert store.get(BILLS_KEY) == before


@pytest.mark.asyncio
async def test_new_user_with_existing_username_is_rejected(repository):
    with pytest.raises(DuplicateEntityError):
        await repository.users.save(User(username="Steven", password="x"), is_new=True)


@pytest.mark.asyncio
async def test_user_update_replaces_by_username(repository):
    await repository.users.save(User(username="manager", password="new", role=UserRole.GUEST))

    users = {u.username: u for u in await repository.users.get_all()}

    assert len(users) == 2
    assert users["manager"].role is UserRole.GUEST
    assert users["manager"].password == "new"


# ── Audit log ──


def _entry(n: int) -> NewAuditLogEntry:
    return NewAuditLogEntry(
        actor_name="Kai",
        module="package",
        action=AuditAction.CREATE,
        description=f"entry {n}",
    )


@pytest.mark.asyncio
async def test_append_assigns_id_and_timestamp(repository):
    stored = await repository.audit_logs.append_log(_entry(1))

    assert stored.id
    assert stored.timestamp == "2025/11/26 09:00:01"
    assert await repository.audit_logs.list_logs() == [stored]


@pytest.mark.asyncio
async def test_log_is_capped_by_insertion_order(repository):
    for n in range(1, 502):
        await repository.audit_logs.append_log(_entry(n))

    logs = await repository.audit_logs.list_logs()

    assert len(logs) == 500
    assert logs[0].description == "entry 501"
    assert logs[-1].description == "entry 2"


@pytest.mark.asyncio
async def test_custom_capacity(store: InMemoryKeyValueStore):
    repository = build_local_repository(store, audit_log_capacity=3)
    for n in range(5):
        await repository.audit_logs.append_log(_entry(n))

    assert [e.description for e in await repository.audit_logs.list_logs()] == [
        "entry 4",
        "entry 3",
        "entry 2",
    ]


# ── File store ──


@pytest.mark.asyncio
async def test_json_file_store_persists_across_instances(tmp_path):
    first = build_local_repository(JsonFileKeyValueStore(tmp_path))
    await first.packages.get_all()
    await first.packages.delete("1")

    second = build_local_repository(JsonFileKeyValueStore(tmp_path))
    ids = {p.id for p in await second.packages.get_all()}

    assert (tmp_path / "APP_PACKAGES.json").exists()
    assert "1" not in ids
    assert len(ids) == len(default_dataset.default_packages()) - 1


def test_file_store_remove_missing_key_is_noop(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    store.remove("APP_SESSION")
    assert store.get("APP_SESSION") is None
