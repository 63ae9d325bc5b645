"""Domain entities for the audit trail.

Entries are immutable once written. Callers describe a change with a
``LogDescriptor``; the pipeline adds the actor (``NewAuditLogEntry``) and
the repository assigns the identifier and timestamp (``AuditLogEntry``).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

AUDIT_LOG_CAPACITY = 500
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditModule:
    """Module tags used by the dashboard. The tag itself is free text."""

    ELECTRICITY = "electricity"
    PACKAGE = "package"
    FACILITY = "facility"
    USER = "user"


@dataclass(frozen=True)
class LogDescriptor:
    """What a pending change will record once it is committed."""

    module: str
    action: AuditAction
    description: str
    diff: str | None = None


@dataclass(frozen=True)
class NewAuditLogEntry:
    """An entry ready to append — everything except id and timestamp."""

    actor_name: str
    module: str
    action: AuditAction
    description: str
    diff: str | None = None

    @classmethod
    def from_descriptor(cls, descriptor: LogDescriptor, actor_name: str) -> "NewAuditLogEntry":
        return cls(
            actor_name=actor_name,
            module=descriptor.module,
            action=descriptor.action,
            description=descriptor.description,
            diff=descriptor.diff,
        )


@dataclass(frozen=True)
class AuditLogEntry:
    id: str
    timestamp: str
    actor_name: str
    module: str
    action: AuditAction
    description: str
    diff: str | None = None


def format_timestamp(moment: datetime | None = None) -> str:
    """Render a wall-clock time the way entries display it (24-hour clock)."""
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an entry timestamp; returns None for anything unrecognised."""
    for fmt in (TIMESTAMP_FORMAT, "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S"):
        try:
            return datetime.strptime(value.strip(), fmt)
        except (ValueError, AttributeError):
            continue
    return None
