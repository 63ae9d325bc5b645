"""SQLAlchemy ORM base and model registry."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names so SQLite and PostgreSQL schemas match.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for the dashboard's ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
