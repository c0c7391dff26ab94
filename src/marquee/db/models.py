"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


class ShowtimeRecord(Base):
    """Scheduled showtime row.

    SQLite drops tzinfo, so datetimes are written as naive UTC and
    re-tagged as UTC when read back.
    """

    __tablename__ = "showtimes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    starts_at: Mapped[datetime] = mapped_column(
        "datetime", DateTime, nullable=False, index=True
    )
    created_by: Mapped[str] = mapped_column(String, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
