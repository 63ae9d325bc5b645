"""SQLAlchemy ORM models for facility top-ups and monthly usage."""

from sqlalchemy import Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class TopUpModel(Base):
    """ORM model — maps to the 'top_up_records' table."""

    __tablename__ = "top_up_records"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    points: Mapped[float] = mapped_column(Float, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<TopUpModel(id={self.id}, date='{self.date}', points={self.points})>"


class FacilityUsageModel(Base):
    """ORM model — maps to the 'facility_usage' table."""

    __tablename__ = "facility_usage"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    gym_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    game_room_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    kitchen_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    av_room_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    k1_space_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (Index("ix_facility_usage_period", "year", "month"),)

    def __repr__(self) -> str:
        return f"<FacilityUsageModel(id={self.id}, period={self.year}/{self.month})>"
