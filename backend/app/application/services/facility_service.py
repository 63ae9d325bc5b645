"""Use cases for the shared facilities: card top-ups and monthly usage counts."""

import uuid
from collections.abc import Mapping
from dataclasses import replace
from datetime import date
from functools import partial

from app.application.interfaces import RecordRepository
from app.application.services.change_descriptions import (
    counter_changes,
    counter_listing,
    format_number,
    parse_number,
)
from app.application.services.mutation_pipeline import MutationPipeline, PendingMutation
from app.application.services.session import ActorSession
from app.domain.entities import (
    FACILITY_COUNTERS,
    AuditAction,
    AuditModule,
    FacilityUsageRecord,
    LogDescriptor,
    TopUpRecord,
)
from app.domain.exceptions import EntityNotFoundError, RecordValidationError


class FacilityService:
    def __init__(
        self,
        top_ups: RecordRepository[TopUpRecord],
        usages: RecordRepository[FacilityUsageRecord],
        pipeline: MutationPipeline,
        session: ActorSession,
    ):
        self._top_ups = top_ups
        self._usages = usages
        self._pipeline = pipeline
        self._session = session

    # ── Top-ups ──────────────────────────────────────────────────────

    async def list_top_ups(self) -> list[TopUpRecord]:
        """Top-ups, most recent date first."""
        records = await self._top_ups.get_all()
        return sorted(records, key=lambda r: r.date, reverse=True)

    async def request_add_top_up(
        self,
        top_up_date: str,
        points: str | float,
        amount: str | float,
        note: str | None = None,
    ) -> PendingMutation:
        self._session.require_editor()
        record = TopUpRecord(
            id=str(uuid.uuid4()),
            date=_parse_date(top_up_date),
            points=_parse_positive("points", points),
            amount=_parse_positive("amount", amount),
            note=note or None,
        )

        description = f"Top-up {format_number(record.points)} points (${format_number(record.amount)})"
        descriptor = LogDescriptor(
            module=AuditModule.FACILITY,
            action=AuditAction.CREATE,
            description=description,
            diff=f"(new) {description}",
        )
        message = (
            "Add this top-up?\n"
            f"Date: {record.date}\n"
            f"Points: {format_number(record.points)}\n"
            f"Amount: ${format_number(record.amount)}"
        )
        return self._pipeline.request_action(partial(self._top_ups.save, record), descriptor, message)

    async def request_update_top_up(
        self,
        record_id: str,
        top_up_date: str,
        points: str | float,
        amount: str | float,
        note: str | None = None,
    ) -> PendingMutation:
        self._session.require_editor()
        records = await self._top_ups.get_all()
        existing = next((r for r in records if r.id == record_id), None)
        if existing is None:
            raise EntityNotFoundError("TopUpRecord", record_id)

        updated = replace(
            existing,
            date=_parse_date(top_up_date),
            points=_parse_positive("points", points),
            amount=_parse_positive("amount", amount),
            note=existing.note if note is None else (note or None),
        )
        diff = (
            f"date:{existing.date}->{updated.date}, "
            f"points:{format_number(existing.points)}->{format_number(updated.points)}, "
            f"amount:{format_number(existing.amount)}->{format_number(updated.amount)}"
        )
        descriptor = LogDescriptor(
            module=AuditModule.FACILITY,
            action=AuditAction.UPDATE,
            description=f"Updated top-up {updated.date}",
            diff=diff,
        )
        return self._pipeline.request_action(
            partial(self._top_ups.save, updated),
            descriptor,
            f"Save the changes to this top-up?\n{diff}",
        )

    async def request_delete_top_up(self, record: TopUpRecord) -> PendingMutation:
        self._session.require_editor()
        descriptor = LogDescriptor(
            module=AuditModule.FACILITY,
            action=AuditAction.DELETE,
            description=f"Deleted top-up {record.date}",
            diff=f"deleted: {format_number(record.points)} points, ${format_number(record.amount)}",
        )
        return self._pipeline.request_action(
            partial(self._top_ups.delete, record.id),
            descriptor,
            f"Delete the top-up of {record.date}?\nThis cannot be undone.",
        )

    # ── Monthly usage ────────────────────────────────────────────────

    async def list_usages(self) -> list[FacilityUsageRecord]:
        records = await self._usages.get_all()
        return sorted(records, key=lambda r: r.period_key)

    async def request_save_usage(
        self, year: int, month: int, counters: Mapping[str, str | int]
    ) -> PendingMutation:
        """Create or overwrite the usage counts for one ROC (year, month).

        Counters missing from ``counters`` are saved as 0.
        """
        self._session.require_editor()
        if not 1 <= month <= 12:
            raise RecordValidationError("month", "must be between 1 and 12")
        unknown = set(counters) - set(FACILITY_COUNTERS)
        if unknown:
            raise RecordValidationError(sorted(unknown)[0], "is not a facility counter")
        values = {field: _parse_count(field, counters.get(field, 0)) for field in FACILITY_COUNTERS}

        records = await self._usages.get_all()
        existing = next((r for r in records if r.period_key == (year, month)), None)
        record = FacilityUsageRecord(
            id=existing.id if existing else str(uuid.uuid4()),
            year=year,
            month=month,
            **values,
        )

        if existing is not None:
            kind = AuditAction.UPDATE
            diff = counter_changes(existing.counters(), record.counters()) or None
        else:
            kind = AuditAction.CREATE
            diff = counter_listing(record.counters())

        descriptor = LogDescriptor(
            module=AuditModule.FACILITY,
            action=kind,
            description=f"{year}/{month:02d} facility usage",
            diff=diff,
        )
        verb = "update" if kind is AuditAction.UPDATE else "add"
        lines = "\n".join(f"{label}: {values[field]}" for field, label in FACILITY_COUNTERS.items())
        return self._pipeline.request_action(
            partial(self._usages.save, record),
            descriptor,
            f"Do you want to {verb} the facility usage for {year}/{month:02d}?\n\n{lines}",
        )


def _parse_date(value: str) -> str:
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except (ValueError, AttributeError):
        raise RecordValidationError("date", "must be a YYYY-MM-DD date") from None


def _parse_positive(field: str, value: str | float) -> float:
    number = parse_number(field, value)
    if number <= 0:
        raise RecordValidationError(field, "is required")
    return number


def _parse_count(field: str, value: str | int) -> int:
    if isinstance(value, str) and not value.strip():
        return 0
    number = parse_number(field, value)
    if number < 0 or not number.is_integer():
        raise RecordValidationError(field, "must be a non-negative whole number")
    return int(number)
