"""Read side of the audit trail — ordering and display styling."""

from dataclasses import dataclass
from datetime import datetime

from app.application.interfaces import AuditLogRepository
from app.domain.entities import AuditAction, AuditLogEntry, AuditModule, parse_timestamp

EMPTY_MESSAGE = "No audit entries yet"

MODULE_STYLES = {
    AuditModule.ELECTRICITY: "emerald",
    AuditModule.PACKAGE: "amber",
}
DEFAULT_MODULE_STYLE = "indigo"

ACTION_STYLES = {
    AuditAction.CREATE: "blue",
    AuditAction.UPDATE: "orange",
    AuditAction.DELETE: "red",
}


@dataclass(frozen=True)
class AuditLogRow:
    timestamp: str
    actor_name: str
    module: str
    module_style: str
    action: AuditAction
    action_style: str
    description: str
    diff: str


class AuditLogViewer:
    EMPTY_MESSAGE = EMPTY_MESSAGE

    def __init__(self, audit_logs: AuditLogRepository):
        self._audit_logs = audit_logs

    async def list_entries(self) -> list[AuditLogEntry]:
        """Entries sorted by timestamp, newest first.

        The repository already returns newest-inserted first; the sort is
        stable, so entries sharing a timestamp keep that order. Timestamps
        that do not parse sink to the end.
        """
        entries = await self._audit_logs.list_logs()
        return sorted(
            entries,
            key=lambda e: parse_timestamp(e.timestamp) or datetime.min,
            reverse=True,
        )

    async def rows(self) -> list[AuditLogRow]:
        return [_to_row(entry) for entry in await self.list_entries()]


def _to_row(entry: AuditLogEntry) -> AuditLogRow:
    return AuditLogRow(
        timestamp=entry.timestamp,
        actor_name=entry.actor_name,
        module=entry.module,
        module_style=MODULE_STYLES.get(entry.module, DEFAULT_MODULE_STYLE),
        action=entry.action,
        action_style=ACTION_STYLES[entry.action],
        description=entry.description,
        diff=entry.diff or "-",
    )
