"""Read-only analytics over the electricity bills.

Everything here is derived from the full bill list on each call; nothing is
cached or persisted.
"""

import math
from dataclasses import dataclass

from app.application.interfaces import RecordRepository
from app.domain.entities import TOTAL_HOUSEHOLDS, Bill
from app.domain.entities.bill import ROC_YEAR_OFFSET


@dataclass(frozen=True)
class RecordHighs:
    max_amount: float
    max_usage: float


@dataclass(frozen=True)
class HouseholdShare:
    roc_year: int
    month: int
    label: str
    share_amount: int
    total_amount: float


@dataclass(frozen=True)
class MonthComparison:
    """One calendar month of the latest year against the year before."""

    month: int
    current_amount: float | None
    last_amount: float | None
    current_usage: float | None
    last_usage: float | None


@dataclass(frozen=True)
class YearOverYear:
    current_year: int  # Gregorian
    last_year: int
    months: list[MonthComparison]


def household_share(amount: float, households: int = TOTAL_HOUSEHOLDS) -> int:
    """Per-household part of a bill, rounded half up to whole dollars."""
    return math.floor(amount / households + 0.5)


def _chronological(bills: list[Bill]) -> list[Bill]:
    return sorted(bills, key=lambda b: b.period_key)


class BillStatisticsService:
    def __init__(self, bills: RecordRepository[Bill], households: int = TOTAL_HOUSEHOLDS):
        self._bills = bills
        self._households = households

    async def record_highs(self) -> RecordHighs:
        """All-time highest amount and usage; zeros when there are no bills."""
        bills = await self._bills.get_all()
        if not bills:
            return RecordHighs(max_amount=0, max_usage=0)
        return RecordHighs(
            max_amount=max(b.amount for b in bills),
            max_usage=max(b.usage for b in bills),
        )

    async def available_roc_years(self) -> list[int]:
        """Distinct ROC years, latest first."""
        bills = await self._bills.get_all()
        return sorted({b.roc_year for b in bills}, reverse=True)

    async def bills_for_year(self, roc_year: int | None = None) -> list[Bill]:
        """Bills of one ROC year (or all of them), newest month first."""
        bills = await self._bills.get_all()
        if roc_year is not None:
            bills = [b for b in bills if b.roc_year == roc_year]
        return sorted(bills, key=lambda b: b.period_key, reverse=True)

    async def household_shares(self, roc_year: int | None = None) -> list[HouseholdShare]:
        """Per-household cost of each bill in chronological order.

        Labels are ``MM`` inside a single year and ``YYYY/MM`` across years.
        """
        bills = _chronological(await self._bills.get_all())
        if roc_year is not None:
            bills = [b for b in bills if b.roc_year == roc_year]
        return [
            HouseholdShare(
                roc_year=b.roc_year,
                month=b.month,
                label=f"{b.month:02d}" if roc_year is not None else f"{b.gregorian_year}/{b.month:02d}",
                share_amount=household_share(b.amount, self._households),
                total_amount=b.amount,
            )
            for b in bills
        ]

    async def year_over_year(self) -> YearOverYear | None:
        """Month-by-month comparison of the latest year with the one before.

        Returns ``None`` when there are no bills. Zero readings count as missing.
        """
        bills = await self._bills.get_all()
        if not bills:
            return None
        latest = max(b.roc_year for b in bills)
        by_period: dict[tuple[int, int], Bill] = {}
        for bill in _chronological(bills):
            by_period.setdefault(bill.period_key, bill)

        months = []
        for month in range(1, 13):
            current = by_period.get((latest, month))
            last = by_period.get((latest - 1, month))
            months.append(MonthComparison(
                month=month,
                current_amount=(current.amount or None) if current else None,
                last_amount=(last.amount or None) if last else None,
                current_usage=(current.usage or None) if current else None,
                last_usage=(last.usage or None) if last else None,
            ))

        current_year = latest + ROC_YEAR_OFFSET
        return YearOverYear(current_year=current_year, last_year=current_year - 1, months=months)
