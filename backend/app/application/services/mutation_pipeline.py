"""Confirm-gated mutation pipeline: request → confirm → write → log.

Every change to a dashboard record passes through here. The write runs
first and the audit entry is appended only after it succeeds; the two are
not transactional, so a failed append leaves the write in place.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.application.interfaces import AuditLogRepository
from app.application.services.confirmation_gate import ConfirmationGate
from app.application.services.session import ActorSession
from app.domain.entities import AuditLogEntry, LogDescriptor, NewAuditLogEntry
from app.domain.exceptions import MutationFailedError, NoPendingConfirmationError

logger = logging.getLogger(__name__)

MutationAction = Callable[[], Any | Awaitable[Any]]


class PipelineState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMMITTING = "committing"


@dataclass(frozen=True)
class PendingMutation:
    """A change waiting for the user's decision."""

    token: int
    confirm_message: str
    descriptor: LogDescriptor


@dataclass(frozen=True)
class MutationOutcome:
    """Result of a committed change."""

    descriptor: LogDescriptor
    result: Any = None
    log_entry: AuditLogEntry | None = None


MutationListener = Callable[[MutationOutcome], None]


class MutationPipeline:
    """Orchestrates confirmed writes and their audit entries."""

    def __init__(
        self,
        audit_logs: AuditLogRepository,
        session: ActorSession,
        gate: ConfirmationGate | None = None,
    ):
        self._audit_logs = audit_logs
        self._session = session
        self._gate = gate or ConfirmationGate()
        self._pending: PendingMutation | None = None
        self._listeners: list[MutationListener] = []

    # ── State ────────────────────────────────────────────────────────

    @property
    def state(self) -> PipelineState:
        if not self._gate.is_open:
            return PipelineState.IDLE
        if self._gate.is_running:
            return PipelineState.COMMITTING
        return PipelineState.AWAITING_CONFIRMATION

    @property
    def pending(self) -> PendingMutation | None:
        if self._pending is not None and self._gate.token == self._pending.token:
            return self._pending
        return None

    def subscribe(self, listener: MutationListener) -> Callable[[], None]:
        """Register a listener for committed changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Operations ───────────────────────────────────────────────────

    def request_action(
        self,
        action: MutationAction,
        descriptor: LogDescriptor,
        confirm_message: str,
    ) -> PendingMutation:
        """Open the confirmation prompt for ``action``. Nothing is written yet."""

        async def commit() -> MutationOutcome:
            return await self._commit(action, descriptor)

        token = self._gate.open(confirm_message, commit)
        self._pending = PendingMutation(
            token=token, confirm_message=confirm_message, descriptor=descriptor
        )
        logger.debug(
            "Awaiting confirmation: %s %s: %s",
            descriptor.module,
            descriptor.action.value,
            descriptor.description,
        )
        return self._pending

    async def confirm(self) -> MutationOutcome:
        """Run the pending action, append its audit entry and notify listeners.

        Raises:
            NoPendingConfirmationError: Nothing is awaiting confirmation.
            ConfirmationStateError: The pending action is already running.
            MutationFailedError: The action failed; nothing was logged and
                the prompt stays open.
        """
        pending = self.pending
        if pending is None:
            raise NoPendingConfirmationError()
        outcome = await self._gate.confirm()
        if self._pending is pending:
            self._pending = None
        self._notify(outcome)
        return outcome

    def cancel(self) -> None:
        """Discard the pending action without writing or logging."""
        if self._pending is not None:
            logger.info("Cancelled: %s", self._pending.descriptor.description)
        self._gate.cancel()
        self._pending = None

    # ── Internals ────────────────────────────────────────────────────

    async def _commit(self, action: MutationAction, descriptor: LogDescriptor) -> MutationOutcome:
        try:
            result = action()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            logger.error("Operation failed (%s): %s", descriptor.description, exc)
            raise MutationFailedError(descriptor.description, exc) from exc

        log_entry = await self._append_log(descriptor)
        logger.info(
            "Committed %s %s: %s",
            descriptor.module,
            descriptor.action.value,
            descriptor.description,
        )
        return MutationOutcome(descriptor=descriptor, result=result, log_entry=log_entry)

    async def _append_log(self, descriptor: LogDescriptor) -> AuditLogEntry | None:
        actor_name = self._session.actor_name
        if actor_name is None:
            logger.warning("No actor in session; audit entry skipped for %s", descriptor.description)
            return None
        try:
            return await self._audit_logs.append_log(
                NewAuditLogEntry.from_descriptor(descriptor, actor_name)
            )
        except Exception as exc:
            logger.error("Failed to append audit entry (%s): %s", descriptor.description, exc)
            return None

    def _notify(self, outcome: MutationOutcome) -> None:
        for listener in list(self._listeners):
            try:
                listener(outcome)
            except Exception:
                logger.exception("Mutation listener %r failed", listener)
