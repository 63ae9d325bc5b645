"""Unit tests for the AuditLogViewer read path."""

import pytest

from app.application.interfaces import AuditLogRepository
from app.application.services import AuditLogViewer
from app.domain.entities import AuditAction, AuditLogEntry, NewAuditLogEntry


class StaticAuditLogRepository(AuditLogRepository):
    """Returns a fixed list, newest-inserted first."""

    def __init__(self, entries: list[AuditLogEntry]):
        self._entries = entries

    async def list_logs(self) -> list[AuditLogEntry]:
        return list(self._entries)

    async def append_log(self, entry: NewAuditLogEntry) -> AuditLogEntry:
        raise NotImplementedError


def _entry(entry_id: str, timestamp: str, module: str = "electricity",
           action: AuditAction = AuditAction.CREATE, diff: str | None = None) -> AuditLogEntry:
    return AuditLogEntry(
        id=entry_id,
        timestamp=timestamp,
        actor_name="Kai",
        module=module,
        action=action,
        description=f"entry {entry_id}",
        diff=diff,
    )


@pytest.mark.asyncio
async def test_entries_sorted_newest_first():
    viewer = AuditLogViewer(StaticAuditLogRepository([
        _entry("a", "2025/11/01 08:00:00"),
        _entry("b", "2025/11/03 08:00:00"),
        _entry("c", "2025/11/02 08:00:00"),
    ]))

    assert [e.id for e in await viewer.list_entries()] == ["b", "c", "a"]


@pytest.mark.asyncio
async def test_equal_timestamps_keep_insertion_order_and_bad_ones_sink():
    viewer = AuditLogViewer(StaticAuditLogRepository([
        _entry("newer", "2025/11/01 08:00:00"),
        _entry("garbled", "yesterday"),
        _entry("older", "2025/11/01 08:00:00"),
    ]))

    assert [e.id for e in await viewer.list_entries()] == ["newer", "older", "garbled"]


@pytest.mark.asyncio
async def test_rows_carry_styles_and_placeholder_diff():
    viewer = AuditLogViewer(StaticAuditLogRepository([
        _entry("1", "2025/11/03 08:00:00", module="electricity", action=AuditAction.CREATE),
        _entry("2", "2025/11/02 08:00:00", module="package", action=AuditAction.UPDATE, diff="1 -> 2"),
        _entry("3", "2025/11/01 08:00:00", module="facility", action=AuditAction.DELETE),
    ]))

    rows = await viewer.rows()

    assert [(r.module_style, r.action_style) for r in rows] == [
        ("emerald", "blue"),
        ("amber", "orange"),
        ("indigo", "red"),
    ]
    assert [r.diff for r in rows] == ["-", "1 -> 2", "-"]


@pytest.mark.asyncio
async def test_empty_log():
    viewer = AuditLogViewer(StaticAuditLogRepository([]))
    assert await viewer.rows() == []
    assert viewer.EMPTY_MESSAGE == "No audit entries yet"
