"""Concrete record repositories backed by SQLAlchemy.

Saves are single ``INSERT … ON CONFLICT DO UPDATE`` statements keyed by
the primary key. Only mutable columns are updated on conflict: the
identifier and the (year, month) natural key keep their first value.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import RecordRepository, UserRepository
from app.domain.entities import Bill, FacilityUsageRecord, PackageRecord, TopUpRecord, User, UserRole
from app.domain.exceptions import DuplicateEntityError, RepositoryError
from app.infrastructure.database.base import Base
from app.infrastructure.database.models import (
    BillModel,
    FacilityUsageModel,
    PackageModel,
    TopUpModel,
    UserModel,
)

T = TypeVar("T")


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise driver/ORM failures as the backend-agnostic RepositoryError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise RepositoryError("sql", f"{operation} failed: {exc}") from exc


def _column_values(entity: Any) -> dict[str, Any]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in asdict(entity).items()
    }


def upsert_statement(
    session: AsyncSession,
    model: type[Base],
    values: dict[str, Any],
    *,
    key: str,
    immutable: frozenset[str],
):
    """Build a dialect-specific insert-or-update for ``model``."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise RepositoryError("sql", f"Upsert is not supported on dialect '{dialect}'")

    mutable = {name: stmt.excluded[name] for name in values if name not in immutable}
    return stmt.on_conflict_do_update(index_elements=[key], set_=mutable)


class SQLAlchemyRecordRepository(RecordRepository[T]):
    """Implements the RecordRepository port for one table."""

    model: type[Base]
    key_field: str = "id"
    immutable_fields: frozenset[str] = frozenset({"id"})

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: Any) -> T:
        """Map ORM model → domain entity."""
        raise NotImplementedError

    async def get_all(self) -> list[T]:
        with translate_errors(f"list {self.model.__tablename__}"):
            result = await self._session.execute(select(self.model))
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save(self, record: T) -> None:
        stmt = upsert_statement(
            self._session,
            self.model,
            _column_values(record),
            key=self.key_field,
            immutable=self.immutable_fields,
        )
        with translate_errors(f"save {self.model.__tablename__}"):
            await self._session.execute(stmt)
            await self._session.flush()

    async def delete(self, record_id: str) -> None:
        key_column = getattr(self.model, self.key_field)
        with translate_errors(f"delete {self.model.__tablename__}"):
            await self._session.execute(delete(self.model).where(key_column == record_id))
            await self._session.flush()


class SQLAlchemyBillRepository(SQLAlchemyRecordRepository[Bill]):
    model = BillModel
    immutable_fields = frozenset({"id", "roc_year", "month"})

    def _to_entity(self, model: BillModel) -> Bill:
        return Bill(
            id=model.id,
            roc_year=model.roc_year,
            month=model.month,
            usage=model.usage,
            amount=model.amount,
            billing_period=model.billing_period,
            contract_capacity=model.contract_capacity,
            max_demand=model.max_demand,
            power_factor=model.power_factor,
            meter_number=model.meter_number,
            current_reading=model.current_reading,
            last_reading=model.last_reading,
            usage_category=model.usage_category,
            payment_deadline=model.payment_deadline,
            basic_fee=model.basic_fee,
            flow_fee=model.flow_fee,
            payment_adjustment=model.payment_adjustment,
            others=model.others,
        )


class SQLAlchemyTopUpRepository(SQLAlchemyRecordRepository[TopUpRecord]):
    model = TopUpModel

    def _to_entity(self, model: TopUpModel) -> TopUpRecord:
        return TopUpRecord(
            id=model.id,
            date=model.date,
            points=model.points,
            amount=model.amount,
            note=model.note,
        )

    async def get_all(self) -> list[TopUpRecord]:
        with translate_errors("list top_up_records"):
            result = await self._session.execute(
                select(TopUpModel).order_by(TopUpModel.date.desc())
            )
            return [self._to_entity(row) for row in result.scalars().all()]


class SQLAlchemyFacilityUsageRepository(SQLAlchemyRecordRepository[FacilityUsageRecord]):
    model = FacilityUsageModel
    immutable_fields = frozenset({"id", "year", "month"})

    def _to_entity(self, model: FacilityUsageModel) -> FacilityUsageRecord:
        return FacilityUsageRecord(
            id=model.id,
            year=model.year,
            month=model.month,
            gym_count=model.gym_count,
            game_room_count=model.game_room_count,
            kitchen_count=model.kitchen_count,
            av_room_count=model.av_room_count,
            k1_space_count=model.k1_space_count,
        )


class SQLAlchemyPackageRepository(SQLAlchemyRecordRepository[PackageRecord]):
    model = PackageModel
    immutable_fields = frozenset({"id", "year", "month"})

    def _to_entity(self, model: PackageModel) -> PackageRecord:
        return PackageRecord(id=model.id, year=model.year, month=model.month, count=model.count)


class SQLAlchemyUserRepository(SQLAlchemyRecordRepository[User], UserRepository):
    model = UserModel
    key_field = "username"
    immutable_fields = frozenset({"username"})

    def _to_entity(self, model: UserModel) -> User:
        return User(
            username=model.username,
            password=model.password,
            role=UserRole(model.role),
            name=model.name,
        )

    async def save(self, record: User, *, is_new: bool = False) -> None:
        if is_new:
            with translate_errors("create user"):
                existing = await self._session.get(UserModel, record.username)
            if existing is not None:
                raise DuplicateEntityError("User", "username", record.username)
        await super().save(record)
