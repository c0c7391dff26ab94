"""Database layer."""

from marquee.db.engine import Database
from marquee.db.models import Base, ShowtimeRecord

__all__ = [
    # Engine
    "Database",
    # Models
    "Base",
    "ShowtimeRecord",
]
