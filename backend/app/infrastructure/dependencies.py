"""Dependency wiring — FastAPI dependencies for the RPC server and the
composition of the headless dashboard client."""

from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from datetime import datetime

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import DataRepository, KeyValueStore
from app.application.services import (
    ActorSession,
    AuditLogViewer,
    AuthenticationService,
    BillStatisticsService,
    ConfirmationGate,
    ElectricityService,
    FacilityService,
    MutationPipeline,
    PackageService,
    RpcDispatcher,
    UserAdminService,
)
from app.config import Settings, get_settings
from app.infrastructure.database.repositories import build_sql_repository
from app.infrastructure.database.session import get_db_session
from app.infrastructure.local_store import build_local_repository
from app.infrastructure.remote import RpcClient, build_remote_repository
from app.infrastructure.storage.json_file_store import JsonFileKeyValueStore


# ── RPC server ───────────────────────────────────────────────────────


async def get_rpc_dispatcher(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RpcDispatcher, None]:
    """Provides an RpcDispatcher over the SQL repositories of this request's session."""
    settings = get_settings()
    repository = build_sql_repository(session, audit_log_capacity=settings.audit_log_capacity)
    yield RpcDispatcher(repository)


# ── Dashboard client ─────────────────────────────────────────────────


@dataclass
class Dashboard:
    """Everything a dashboard front end talks to, wired onto one backend."""

    repository: DataRepository
    session: ActorSession
    pipeline: MutationPipeline
    auth: AuthenticationService
    audit_log: AuditLogViewer
    electricity: ElectricityService
    bill_statistics: BillStatisticsService
    packages: PackageService
    facilities: FacilityService
    users: UserAdminService


def build_repository(
    settings: Settings,
    *,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> DataRepository:
    """Select the storage backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "remote":
        return build_remote_repository(RpcClient(settings.remote_api_url, http_client=http_client))
    return build_local_repository(
        store or JsonFileKeyValueStore(settings.local_store_dir),
        audit_log_capacity=settings.audit_log_capacity,
        clock=clock,
    )


def build_dashboard(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Dashboard:
    """Compose the dashboard client.

    The session token always lives in the local key-value store, whichever
    backend holds the records. The persisted session is restored here.
    """
    settings = settings or get_settings()
    store = store or JsonFileKeyValueStore(settings.local_store_dir)
    repository = build_repository(settings, store=store, http_client=http_client, clock=clock)

    session = ActorSession(store)
    session.restore()
    gate = ConfirmationGate()
    pipeline = MutationPipeline(repository.audit_logs, session, gate)
    # Logging out closes any open confirmation prompt.
    session.add_logout_listener(pipeline.cancel)

    return Dashboard(
        repository=repository,
        session=session,
        pipeline=pipeline,
        auth=AuthenticationService(repository.users, session),
        audit_log=AuditLogViewer(repository.audit_logs),
        electricity=ElectricityService(repository.bills, pipeline, session),
        bill_statistics=BillStatisticsService(repository.bills),
        packages=PackageService(repository.packages, pipeline, session),
        facilities=FacilityService(repository.top_ups, repository.facility_usages, pipeline, session),
        users=UserAdminService(repository.users, pipeline, session),
    )
