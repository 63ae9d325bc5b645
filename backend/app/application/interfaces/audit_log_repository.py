"""Abstract repository interface for the append-only audit log."""

from abc import ABC, abstractmethod

from app.domain.entities import AuditLogEntry, NewAuditLogEntry


class AuditLogRepository(ABC):
    """Port — append and read audit entries. There is no update or delete."""

    @abstractmethod
    async def list_logs(self) -> list[AuditLogEntry]:
        """Return the retained entries (at most the capacity), newest first."""
        ...

    @abstractmethod
    async def append_log(self, entry: NewAuditLogEntry) -> AuditLogEntry:
        """Assign id and timestamp, append, and evict the oldest past capacity.

        Returns:
            The stored entry.
        """
        ...
