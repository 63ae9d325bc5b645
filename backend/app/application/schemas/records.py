"""Pydantic DTOs for the dashboard records.

The same camelCase JSON shape is used by the local store slots and by the
remote RPC wire format.
"""

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import (
    AuditAction,
    AuditLogEntry,
    Bill,
    FacilityUsageRecord,
    NewAuditLogEntry,
    PackageRecord,
    TopUpRecord,
    User,
    UserRole,
)


class CamelModel(BaseModel):
    """Base DTO — camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class BillSchema(CamelModel):
    id: str = Field(..., min_length=1)
    roc_year: int = Field(..., examples=[114])
    month: int = Field(..., ge=1, le=12)
    usage: float = Field(..., ge=0, examples=[10960])
    amount: float = Field(..., ge=0, examples=[50309])
    billing_period: str | None = None
    contract_capacity: float | None = None
    max_demand: float | None = None
    power_factor: float | None = None
    meter_number: str | None = None
    current_reading: float | None = None
    last_reading: float | None = None
    usage_category: str | None = None
    payment_deadline: str | None = None
    basic_fee: float = 0.0
    flow_fee: float = 0.0
    payment_adjustment: float = 0.0
    others: float = 0.0

    @classmethod
    def from_entity(cls, bill: Bill) -> "BillSchema":
        return cls.model_validate(asdict(bill))

    def to_entity(self) -> Bill:
        return Bill(**self.model_dump())


class UserSchema(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.GUEST
    name: str | None = None
    password: str | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserSchema":
        return cls.model_validate(asdict(user))

    def to_entity(self) -> User:
        return User(**self.model_dump())


class TopUpSchema(CamelModel):
    id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", examples=["2025-11-01"])
    points: float = Field(..., ge=0)
    amount: float = Field(..., ge=0)
    note: str | None = None

    @classmethod
    def from_entity(cls, record: TopUpRecord) -> "TopUpSchema":
        return cls.model_validate(asdict(record))

    def to_entity(self) -> TopUpRecord:
        return TopUpRecord(**self.model_dump())


class FacilityUsageSchema(CamelModel):
    id: str = Field(..., min_length=1)
    year: int
    month: int = Field(..., ge=1, le=12)
    gym_count: int = Field(0, ge=0)
    game_room_count: int = Field(0, ge=0)
    kitchen_count: int = Field(0, ge=0)
    av_room_count: int = Field(0, ge=0)
    k1_space_count: int = Field(0, ge=0)

    @classmethod
    def from_entity(cls, record: FacilityUsageRecord) -> "FacilityUsageSchema":
        return cls.model_validate(asdict(record))

    def to_entity(self) -> FacilityUsageRecord:
        return FacilityUsageRecord(**self.model_dump())


class PackageSchema(CamelModel):
    id: str = Field(..., min_length=1)
    year: int
    month: int = Field(..., ge=1, le=12)
    count: int = Field(..., ge=0)

    @classmethod
    def from_entity(cls, record: PackageRecord) -> "PackageSchema":
        return cls.model_validate(asdict(record))

    def to_entity(self) -> PackageRecord:
        return PackageRecord(**self.model_dump())


class AuditLogEntrySchema(CamelModel):
    id: str
    timestamp: str
    actor_name: str
    module: str
    action: AuditAction
    description: str
    diff: str | None = None

    @classmethod
    def from_entity(cls, entry: AuditLogEntry) -> "AuditLogEntrySchema":
        return cls.model_validate(asdict(entry))

    def to_entity(self) -> AuditLogEntry:
        return AuditLogEntry(**self.model_dump())


class NewAuditLogSchema(CamelModel):
    """Body of ``addAuditLog`` — the server assigns id and timestamp."""

    actor_name: str = Field(..., min_length=1)
    module: str = Field(..., min_length=1, max_length=50)
    action: AuditAction
    description: str
    diff: str | None = None

    @classmethod
    def from_entity(cls, entry: NewAuditLogEntry) -> "NewAuditLogSchema":
        return cls.model_validate(asdict(entry))

    def to_entity(self) -> NewAuditLogEntry:
        return NewAuditLogEntry(**self.model_dump())


class SaveUserRequest(CamelModel):
    """Body of ``saveUser`` — ``isNew`` separates create from update."""

    user: UserSchema
    is_new: bool = False


class DeleteRecordRequest(CamelModel):
    id: str = Field(..., min_length=1)


class DeleteUserRequest(CamelModel):
    username: str = Field(..., min_length=1)
