"""Local repository backend — every collection is a JSON array in one slot.

An absent slot is seeded with the default dataset on first read and the
seed is written back, so repeated reads are stable across restarts. A slot
that no longer parses is reset to its default instead of failing.
"""

import json
import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from app.application.interfaces import (
    AuditLogRepository,
    DataRepository,
    KeyValueStore,
    RecordRepository,
    UserRepository,
)
from app.application.schemas import (
    AuditLogEntrySchema,
    BillSchema,
    FacilityUsageSchema,
    PackageSchema,
    TopUpSchema,
    UserSchema,
)
from app.domain.entities import (
    AUDIT_LOG_CAPACITY,
    AuditLogEntry,
    Bill,
    FacilityUsageRecord,
    NewAuditLogEntry,
    PackageRecord,
    TopUpRecord,
    User,
    format_timestamp,
)
from app.domain.exceptions import DuplicateEntityError, RepositoryError
from app.infrastructure.seed import default_dataset

logger = logging.getLogger(__name__)

T = TypeVar("T")

BILLS_KEY = "APP_BILLS"
USERS_KEY = "APP_USERS"
TOP_UPS_KEY = "APP_TOPUPS"
FACILITY_USAGE_KEY = "APP_FACILITY_USAGE"
PACKAGES_KEY = "APP_PACKAGES"
LOGS_KEY = "APP_LOGS"


class JsonSlot(Generic[T]):
    """Reads and writes one typed array slot, seeding and self-healing on read."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        schema: type[Any],
        defaults: Callable[[], list[T]],
    ):
        self._store = store
        self._key = key
        self._schema = schema
        self._defaults = defaults

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[T]:
        try:
            # Undecodable bytes surface here as UnicodeDecodeError.
            raw = self._store.get(self._key)
            if raw is not None:
                items = json.loads(raw)
                if not isinstance(items, list):
                    raise ValueError("slot does not hold a JSON array")
                return [self._schema.model_validate(item).to_entity() for item in items]
        except (ValidationError, ValueError, TypeError) as exc:
            logger.warning(
                "Failed to parse local slot %s, resetting to default: %s", self._key, exc
            )
        return self._reset()

    def dump(self, records: list[T]) -> None:
        try:
            payload = [self._schema.from_entity(record).to_wire() for record in records]
        except ValidationError as exc:
            raise RepositoryError(
                "local", f"Refusing to write invalid record to slot {self._key}: {exc}"
            ) from exc
        self._store.set(self._key, json.dumps(payload, ensure_ascii=False))

    def _reset(self) -> list[T]:
        records = self._defaults()
        self.dump(records)
        return records


class LocalCollectionRepository(RecordRepository[T]):
    """Implements the RecordRepository port on top of a JSON slot."""

    def __init__(self, slot: JsonSlot[T], id_of: Callable[[T], str] = lambda r: r.id):
        self._slot = slot
        self._id_of = id_of

    async def get_all(self) -> list[T]:
        return self._slot.load()

    async def save(self, record: T) -> None:
        records = self._slot.load()
        record_id = self._id_of(record)
        for index, existing in enumerate(records):
            if self._id_of(existing) == record_id:
                records[index] = record
                break
        else:
            records.append(record)
        self._slot.dump(records)

    async def delete(self, record_id: str) -> None:
        records = self._slot.load()
        remaining = [r for r in records if self._id_of(r) != record_id]
        if len(remaining) != len(records):
            self._slot.dump(remaining)


class LocalUserRepository(LocalCollectionRepository[User], UserRepository):
    """Users keyed by username; ``is_new`` refuses to overwrite an account."""

    def __init__(self, slot: JsonSlot[User]):
        super().__init__(slot, id_of=lambda u: u.username)

    async def save(self, record: User, *, is_new: bool = False) -> None:
        if is_new:
            existing = self._slot.load()
            if any(u.username == record.username for u in existing):
                raise DuplicateEntityError("User", "username", record.username)
        await super().save(record)


class LocalAuditLogRepository(AuditLogRepository):
    """Append-only ring buffer stored oldest-first in its slot."""

    def __init__(
        self,
        slot: JsonSlot[AuditLogEntry],
        capacity: int = AUDIT_LOG_CAPACITY,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._slot = slot
        self._capacity = capacity
        self._clock = clock

    async def list_logs(self) -> list[AuditLogEntry]:
        entries = self._slot.load()
        return list(reversed(entries[-self._capacity:]))

    async def append_log(self, entry: NewAuditLogEntry) -> AuditLogEntry:
        entries = self._slot.load()
        stored = AuditLogEntry(
            id=str(uuid.uuid4()),
            timestamp=format_timestamp(self._clock()),
            actor_name=entry.actor_name,
            module=entry.module,
            action=entry.action,
            description=entry.description,
            diff=entry.diff,
        )
        entries.append(stored)
        if len(entries) > self._capacity:
            # Evict by insertion order, never by timestamp.
            del entries[: len(entries) - self._capacity]
        self._slot.dump(entries)
        return stored


def build_local_repository(
    store: KeyValueStore,
    *,
    audit_log_capacity: int = AUDIT_LOG_CAPACITY,
    clock: Callable[[], datetime] = datetime.now,
) -> DataRepository:
    """Wire every collection of the local backend onto ``store``."""
    return DataRepository(
        bills=LocalCollectionRepository[Bill](
            JsonSlot(store, BILLS_KEY, BillSchema, default_dataset.default_bills)
        ),
        users=LocalUserRepository(
            JsonSlot(store, USERS_KEY, UserSchema, default_dataset.default_users)
        ),
        top_ups=LocalCollectionRepository[TopUpRecord](
            JsonSlot(store, TOP_UPS_KEY, TopUpSchema, default_dataset.default_top_ups)
        ),
        facility_usages=LocalCollectionRepository[FacilityUsageRecord](
            JsonSlot(
                store,
                FACILITY_USAGE_KEY,
                FacilityUsageSchema,
                default_dataset.default_facility_usages,
            )
        ),
        packages=LocalCollectionRepository[PackageRecord](
            JsonSlot(store, PACKAGES_KEY, PackageSchema, default_dataset.default_packages)
        ),
        audit_logs=LocalAuditLogRepository(
            JsonSlot(store, LOGS_KEY, AuditLogEntrySchema, list),
            capacity=audit_log_capacity,
            clock=clock,
        ),
    )
