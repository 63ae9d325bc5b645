"""Use cases for the shared electricity bills."""

from functools import partial

from app.application.interfaces import RecordRepository
from app.application.services.change_descriptions import format_number, transition
from app.application.services.mutation_pipeline import MutationPipeline, PendingMutation
from app.application.services.session import ActorSession
from app.domain.entities import AuditAction, AuditModule, Bill, LogDescriptor
from app.domain.exceptions import DuplicateEntityError, RecordValidationError


class ElectricityService:
    """Validates bill edits and hands them to the mutation pipeline.

    Uniqueness of (roc_year, month) is checked here; storage accepts
    duplicates.
    """

    def __init__(
        self,
        bills: RecordRepository[Bill],
        pipeline: MutationPipeline,
        session: ActorSession,
    ):
        self._bills = bills
        self._pipeline = pipeline
        self._session = session

    async def list_bills(self) -> list[Bill]:
        """All bills, newest billing month first."""
        bills = await self._bills.get_all()
        return sorted(bills, key=lambda b: b.period_key, reverse=True)

    async def request_create(self, bill: Bill) -> PendingMutation:
        """Queue a new bill, e.g. one read off a scanned invoice."""
        self._session.require_editor()
        self._validate(bill)
        await self._ensure_period_free(bill)

        descriptor = LogDescriptor(
            module=AuditModule.ELECTRICITY,
            action=AuditAction.CREATE,
            description=f"Imported {_period_label(bill)} electricity bill",
            diff=f"amount: {format_number(bill.amount)}, usage: {format_number(bill.usage)}",
        )
        return self._pipeline.request_action(
            partial(self._bills.save, bill),
            descriptor,
            f"Add the {_period_label(bill)} electricity bill?",
        )

    async def request_update(self, original: Bill, updated: Bill) -> PendingMutation:
        self._session.require_editor()
        if updated.id != original.id:
            raise RecordValidationError("id", "cannot be changed")
        if updated.roc_year != original.roc_year:
            raise RecordValidationError("roc_year", "cannot be changed")
        if updated.month != original.month:
            raise RecordValidationError("month", "cannot be changed")
        self._validate(updated)

        diff = (
            f"amount: {transition(original.amount, updated.amount)}, "
            f"usage: {transition(original.usage, updated.usage)}"
        )
        descriptor = LogDescriptor(
            module=AuditModule.ELECTRICITY,
            action=AuditAction.UPDATE,
            description=f"Corrected {_period_label(updated)} electricity bill",
            diff=diff,
        )
        return self._pipeline.request_action(
            partial(self._bills.save, updated),
            descriptor,
            f"Save the changes to the {_period_label(updated)} bill?",
        )

    async def request_delete(self, bill: Bill) -> PendingMutation:
        self._session.require_editor()
        descriptor = LogDescriptor(
            module=AuditModule.ELECTRICITY,
            action=AuditAction.DELETE,
            description=f"{_period_label(bill)} electricity bill",
            diff=f"amount: ${format_number(bill.amount)}",
        )
        return self._pipeline.request_action(
            partial(self._bills.delete, bill.id),
            descriptor,
            f"Delete the {_period_label(bill)} electricity bill?\nThis cannot be undone.",
        )

    @staticmethod
    def _validate(bill: Bill) -> None:
        if not bill.roc_year or bill.roc_year < 1:
            raise RecordValidationError("roc_year", "is required")
        if not 1 <= bill.month <= 12:
            raise RecordValidationError("month", "must be between 1 and 12")
        if not bill.amount or bill.amount < 0:
            raise RecordValidationError("amount", "is required")
        if bill.usage < 0:
            raise RecordValidationError("usage", "cannot be negative")

    async def _ensure_period_free(self, bill: Bill) -> None:
        for existing in await self._bills.get_all():
            if existing.id != bill.id and existing.period_key == bill.period_key:
                raise DuplicateEntityError("Bill", "period", _period_label(bill))


def _period_label(bill: Bill) -> str:
    return f"{bill.gregorian_year}/{bill.month:02d}"
