"""Use cases for the monthly package-count grid."""

import uuid
from dataclasses import replace
from functools import partial

from app.application.interfaces import RecordRepository
from app.application.services.change_descriptions import EMPTY_VALUE, parse_number, transition
from app.application.services.mutation_pipeline import MutationPipeline, PendingMutation
from app.application.services.session import ActorSession
from app.domain.entities import AuditAction, AuditModule, LogDescriptor, PackageRecord
from app.domain.exceptions import RecordValidationError

_VERBS = {
    AuditAction.CREATE: "add",
    AuditAction.UPDATE: "change",
    AuditAction.DELETE: "clear",
}


class PackageService:
    """One grid cell per (year, month). Clearing a cell deletes its record."""

    def __init__(
        self,
        packages: RecordRepository[PackageRecord],
        pipeline: MutationPipeline,
        session: ActorSession,
    ):
        self._packages = packages
        self._pipeline = pipeline
        self._session = session

    async def list_packages(self) -> list[PackageRecord]:
        records = await self._packages.get_all()
        return sorted(records, key=lambda r: r.period_key)

    async def request_set_count(
        self, year: int, month: int, value: str | int | None
    ) -> PendingMutation | None:
        """Queue a cell edit.

        Args:
            year: Gregorian year.
            month: 1-12.
            value: The new count; blank or None clears the cell.

        Returns:
            The pending change, or None when the value is unchanged.

        Raises:
            RecordValidationError: ``value`` is not a non-negative whole number.
        """
        self._session.require_editor()
        if not 1 <= month <= 12:
            raise RecordValidationError("month", "must be between 1 and 12")
        new_count = _parse_count(value)

        records = await self._packages.get_all()
        existing = next((r for r in records if r.period_key == (year, month)), None)
        current = existing.count if existing else None
        if current == new_count:
            return None

        if new_count is None:
            kind = AuditAction.DELETE
            diff = f"{current} -> {EMPTY_VALUE}"
            action = partial(self._packages.delete, existing.id)
        elif existing is not None:
            kind = AuditAction.UPDATE
            diff = transition(current, new_count)
            action = partial(self._packages.save, replace(existing, count=new_count))
        else:
            kind = AuditAction.CREATE
            diff = transition(None, new_count)
            record = PackageRecord(id=str(uuid.uuid4()), year=year, month=month, count=new_count)
            action = partial(self._packages.save, record)

        descriptor = LogDescriptor(
            module=AuditModule.PACKAGE,
            action=kind,
            description=f"{year}/{month:02d} package count",
            diff=diff,
        )
        message = (
            f"You are about to {_VERBS[kind]} the {year}/{month:02d} package count.\n\n"
            f"Change: {diff}"
        )
        return self._pipeline.request_action(action, descriptor, message)


def _parse_count(value: str | int | None) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    number = parse_number("count", value)
    if number < 0 or not number.is_integer():
        raise RecordValidationError("count", "must be a non-negative whole number")
    return int(number)
