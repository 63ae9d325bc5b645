"""SQLAlchemy ORM model for monthly parcel counts."""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class PackageModel(Base):
    """ORM model — maps to the 'package_records' table."""

    __tablename__ = "package_records"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index("ix_package_records_period", "year", "month"),)

    def __repr__(self) -> str:
        return f"<PackageModel(id={self.id}, period={self.year}/{self.month}, count={self.count})>"
