"""Domain entity — a monthly shared-electricity bill."""

from dataclasses import dataclass

ROC_YEAR_OFFSET = 1911

# Households sharing the common electricity meter.
TOTAL_HOUSEHOLDS = 167


@dataclass
class Bill:
    """One electricity bill, keyed naturally by (roc_year, month).

    ``month`` is the month in which the billing period ends. The fee
    breakdown is filled with zeros when unknown so the record always has
    a complete numeric shape.
    """

    id: str
    roc_year: int
    month: int
    usage: float  # kWh
    amount: float  # TWD

    billing_period: str | None = None
    contract_capacity: float | None = None
    max_demand: float | None = None
    power_factor: float | None = None
    meter_number: str | None = None
    current_reading: float | None = None
    last_reading: float | None = None
    usage_category: str | None = None  # e.g. "C5"
    payment_deadline: str | None = None

    basic_fee: float = 0.0
    flow_fee: float = 0.0
    payment_adjustment: float = 0.0  # power-factor adjustment, usually negative
    others: float = 0.0

    @property
    def gregorian_year(self) -> int:
        return self.roc_year + ROC_YEAR_OFFSET

    @property
    def period_key(self) -> tuple[int, int]:
        return (self.roc_year, self.month)

    @property
    def fee_total(self) -> float:
        return self.basic_fee + self.flow_fee + self.payment_adjustment + self.others

    def reconciles(self, tolerance: float = 1.0) -> bool:
        """Whether the fee breakdown adds up to ``amount`` (display hint only)."""
        return abs(self.fee_total - self.amount) <= tolerance
