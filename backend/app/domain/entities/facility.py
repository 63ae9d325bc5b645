"""Domain entities for shared facilities — card top-ups and monthly usage."""

from dataclasses import dataclass, fields


@dataclass
class TopUpRecord:
    """Points credited to the shared facility card."""

    id: str
    date: str  # YYYY-MM-DD
    points: float
    amount: float
    note: str | None = None


# Counter field → human label, in display order.
FACILITY_COUNTERS: dict[str, str] = {
    "gym_count": "Gym",
    "game_room_count": "Game room",
    "kitchen_count": "Kitchen",
    "av_room_count": "AV room",
    "k1_space_count": "K1",
}


@dataclass
class FacilityUsageRecord:
    """Monthly usage counts for the shared facilities, keyed by (ROC year, month)."""

    id: str
    year: int
    month: int
    gym_count: int = 0
    game_room_count: int = 0
    kitchen_count: int = 0
    av_room_count: int = 0
    k1_space_count: int = 0

    @property
    def period_key(self) -> tuple[int, int]:
        return (self.year, self.month)

    def counters(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in FACILITY_COUNTERS}

    @property
    def total(self) -> int:
        return sum(self.counters().values())
