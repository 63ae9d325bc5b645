"""Concrete audit log repository backed by SQLAlchemy."""

import uuid
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import AuditLogRepository
from app.domain.entities import (
    AUDIT_LOG_CAPACITY,
    AuditAction,
    AuditLogEntry,
    NewAuditLogEntry,
    format_timestamp,
)
from app.infrastructure.database.models import AuditLogModel
from .record_repositories import translate_errors


class SQLAlchemyAuditLogRepository(AuditLogRepository):
    """Implements the AuditLogRepository port as a capped table."""

    def __init__(
        self,
        session: AsyncSession,
        capacity: int = AUDIT_LOG_CAPACITY,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._session = session
        self._capacity = capacity
        self._clock = clock

    def _to_entity(self, model: AuditLogModel) -> AuditLogEntry:
        """Map ORM model → domain entity."""
        return AuditLogEntry(
            id=model.id,
            timestamp=model.timestamp,
            actor_name=model.actor_name,
            module=model.module,
            action=AuditAction(model.action),
            description=model.description,
            diff=model.diff,
        )

    async def list_logs(self) -> list[AuditLogEntry]:
        stmt = (
            select(AuditLogModel)
            .order_by(AuditLogModel.seq.desc())
            .limit(self._capacity)
        )
        with translate_errors("list audit_logs"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def append_log(self, entry: NewAuditLogEntry) -> AuditLogEntry:
        model = AuditLogModel(
            id=str(uuid.uuid4()),
            timestamp=format_timestamp(self._clock()),
            actor_name=entry.actor_name,
            module=entry.module,
            action=entry.action.value,
            description=entry.description,
            diff=entry.diff,
        )
        with translate_errors("append audit_logs"):
            self._session.add(model)
            await self._session.flush()
            await self._evict_overflow()
        return self._to_entity(model)

    async def _evict_overflow(self) -> None:
        """Drop every row older than the newest ``capacity`` rows."""
        threshold = await self._session.scalar(
            select(AuditLogModel.seq)
            .order_by(AuditLogModel.seq.desc())
            .offset(self._capacity)
            .limit(1)
        )
        if threshold is not None:
            await self._session.execute(
                delete(AuditLogModel).where(AuditLogModel.seq <= threshold)
            )
            await self._session.flush()
