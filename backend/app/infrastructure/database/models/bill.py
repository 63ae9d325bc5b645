"""SQLAlchemy ORM model for the Bill entity."""

from sqlalchemy import Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class BillModel(Base):
    """ORM model — maps to the 'bills' table."""

    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    roc_year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    usage: Mapped[float] = mapped_column(Float, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    billing_period: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contract_capacity: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_demand: Mapped[float | None] = mapped_column(Float, nullable=True)
    power_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    meter_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    current_reading: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_reading: Mapped[float | None] = mapped_column(Float, nullable=True)
    usage_category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    payment_deadline: Mapped[str | None] = mapped_column(String(50), nullable=True)
    basic_fee: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    flow_fee: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    payment_adjustment: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    others: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Not unique: (roc_year, month) uniqueness is checked by the services.
    __table_args__ = (Index("ix_bills_period", "roc_year", "month"),)

    def __repr__(self) -> str:
        return f"<BillModel(id={self.id}, period={self.roc_year}/{self.month})>"
