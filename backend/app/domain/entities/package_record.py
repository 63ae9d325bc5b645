"""Domain entity — number of parcels received in a month."""

from dataclasses import dataclass


@dataclass
class PackageRecord:
    id: str
    year: int  # Gregorian
    month: int
    count: int

    @property
    def period_key(self) -> tuple[int, int]:
        return (self.year, self.month)
