"""End-to-end tests: remote repository → FastAPI RPC endpoint → SQLite."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.application.interfaces import DataRepository
from app.config import Settings
from app.domain.entities import AuditAction, Bill, NewAuditLogEntry, User, UserRole
from app.domain.exceptions import RecordValidationError, RepositoryError
from app.infrastructure.database import Base
from app.infrastructure.database.repositories import SQLAlchemyAuditLogRepository, build_sql_repository
from app.infrastructure.database.session import get_db_session
from app.infrastructure.dependencies import build_dashboard
from app.infrastructure.remote import RpcClient, build_remote_repository
from app.infrastructure.seed import seed_empty_collections
from app.infrastructure.storage.json_file_store import InMemoryKeyValueStore
from app.main import create_app

ENDPOINT = "http://test/api/v1/rpc"


@dataclass
class Backend:
    client: AsyncClient
    remote: DataRepository
    session_factory: async_sessionmaker


@asynccontextmanager
async def rpc_backend(tmp_path, *, seed: bool = True) -> AsyncIterator[Backend]:
    """Run the app against a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    if seed:
        async with factory() as session:
            await seed_empty_collections(build_sql_repository(session))
            await session.commit()

    async def override_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        remote = build_remote_repository(RpcClient(ENDPOINT, http_client=client))
        yield Backend(client=client, remote=remote, session_factory=factory)
    await engine.dispose()


@pytest.mark.asyncio
async def test_seeded_tables_are_served(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        bills = await backend.remote.bills.get_all()
        users = await backend.remote.users.get_all()

    assert len(bills) == 17
    assert {u.username for u in users} == {"Steven", "manager"}


@pytest.mark.asyncio
async def test_seeding_is_idempotent(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        async with backend.session_factory() as session:
            assert await seed_empty_collections(build_sql_repository(session)) == {}


@pytest.mark.asyncio
async def test_bill_upsert_keeps_one_row(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        await backend.remote.bills.save(Bill(id="b1", roc_year=114, month=11, usage=10960, amount=50309))
        await backend.remote.bills.save(Bill(id="b1", roc_year=114, month=11, usage=11000, amount=51000))
        bills = await backend.remote.bills.get_all()

    assert len(bills) == 1
    assert bills[0].usage == 11000
    assert bills[0].amount == 51000


@pytest.mark.asyncio
async def test_upsert_never_moves_natural_key(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        await backend.remote.bills.save(Bill(id="b1", roc_year=114, month=11, usage=1, amount=1))
        await backend.remote.bills.save(Bill(id="b1", roc_year=114, month=12, usage=2, amount=2))
        (bill,) = await backend.remote.bills.get_all()

    assert bill.period_key == (114, 11)
    assert bill.amount == 2


@pytest.mark.asyncio
async def test_delete_unknown_id_succeeds(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        await backend.remote.packages.delete("missing")
        packages = await backend.remote.packages.get_all()

    assert len(packages) == 19


@pytest.mark.asyncio
async def test_unknown_action_is_a_400(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        with pytest.raises(RepositoryError) as exc_info:
            await RpcClient(ENDPOINT, http_client=backend.client).call("dropTables")
        response = await backend.client.get("/api/v1/rpc")

    assert exc_info.value.status_code == 400
    assert "dropTables" in exc_info.value.message
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_invalid_body_is_a_400(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        response = await backend.client.post(
            "/api/v1/rpc", params={"action": "saveBill"}, json={"id": "x"}
        )
        garbage = await backend.client.post(
            "/api/v1/rpc",
            params={"action": "savePackage"},
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        bills = await backend.remote.bills.get_all()

    assert response.status_code == 400
    assert "error" in response.json()
    assert garbage.status_code == 400
    assert bills == []


@pytest.mark.asyncio
async def test_duplicate_new_user_is_rejected(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        with pytest.raises(RepositoryError) as exc_info:
            await backend.remote.users.save(User(username="manager", password="x"), is_new=True)
        await backend.remote.users.save(
            User(username="manager", password="x", role=UserRole.GUEST, name="PM")
        )
        users = {u.username: u for u in await backend.remote.users.get_all()}

    assert exc_info.value.status_code == 409
    assert users["manager"].role is UserRole.GUEST


@pytest.mark.asyncio
async def test_audit_log_round_trip(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        stored = await backend.remote.audit_logs.append_log(NewAuditLogEntry(
            actor_name="Kai",
            module="electricity",
            action=AuditAction.DELETE,
            description="2025/11 electricity bill",
            diff="amount: $50309",
        ))
        logs = await backend.remote.audit_logs.list_logs()

    assert logs == [stored]
    assert stored.id
    assert stored.action is AuditAction.DELETE


@pytest.mark.asyncio
async def test_server_caps_audit_log_by_insertion_order(tmp_path):
    async with rpc_backend(tmp_path, seed=False) as backend:
        async with backend.session_factory() as session:
            repository = SQLAlchemyAuditLogRepository(session, capacity=3)
            for n in range(1, 6):
                await repository.append_log(NewAuditLogEntry(
                    actor_name="Kai", module="package", action=AuditAction.CREATE,
                    description=f"entry {n}",
                ))
            await session.commit()
        logs = await backend.remote.audit_logs.list_logs()

    assert [e.description for e in logs] == ["entry 5", "entry 4", "entry 3"]


@pytest.mark.asyncio
async def test_pipeline_over_remote_backend(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        dashboard = build_dashboard(
            Settings(storage_backend="remote", remote_api_url=ENDPOINT, _env_file=None),
            store=InMemoryKeyValueStore(),
            http_client=backend.client,
        )
        await dashboard.auth.authenticate("manager", "manager")

        await dashboard.packages.request_set_count(2025, 11, "820")
        outcome = await dashboard.pipeline.confirm()
        rows = await dashboard.audit_log.rows()
        packages = await dashboard.packages.list_packages()

    assert outcome.log_entry.actor_name == "Property Manager"
    assert rows[0].description == "2025/11 package count"
    assert rows[0].diff == "815 -> 820"
    assert rows[0].module_style == "amber"
    assert next(p for p in packages if p.period_key == (2025, 11)).count == 820


@pytest.mark.asyncio
async def test_bill_correction_over_remote_backend_stores_what_it_logs(tmp_path):
    async with rpc_backend(tmp_path) as backend:
        dashboard = build_dashboard(
            Settings(storage_backend="remote", remote_api_url=ENDPOINT, _env_file=None),
            store=InMemoryKeyValueStore(),
            http_client=backend.client,
        )
        await dashboard.auth.authenticate("manager", "manager")
        original = next(b for b in await dashboard.electricity.list_bills() if b.id == "17")
        logs_before = await backend.remote.audit_logs.list_logs()

        with pytest.raises(RecordValidationError):
            await dashboard.electricity.request_update(
                original, Bill(id="17", roc_year=114, month=12, usage=1, amount=1)
            )
        logs_after_reject = await backend.remote.audit_logs.list_logs()

        await dashboard.electricity.request_update(
            original, Bill(id="17", roc_year=114, month=11, usage=11000, amount=51000)
        )
        outcome = await dashboard.pipeline.confirm()
        stored = next(b for b in await backend.remote.bills.get_all() if b.id == "17")

    assert logs_after_reject == logs_before
    assert outcome.log_entry.description == "Corrected 2025/11 electricity bill"
    assert stored.period_key == (114, 11)
    assert stored.amount == 51000
