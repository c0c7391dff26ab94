"""Showtime types.

Public types:
- Showtime: A single scheduled movie event
- RecencyPolicy: How "currently playing" is decided
- ShowtimeError and subclasses: Domain failures with user-facing messages
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class RecencyPolicy(StrEnum):
    """Policy for deciding which past showtime is still "current".

    BOUNDED: only a showtime that started within the configured window counts.
    UNBOUNDED: the most recent past showtime is always current.
    """

    BOUNDED = "bounded"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class Showtime:
    """A scheduled movie event."""

    id: str
    title: str
    datetime: datetime
    created_by: str
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        # Frozen, so normalize through object.__setattr__
        object.__setattr__(self, "datetime", to_utc(self.datetime))
        object.__setattr__(self, "created_at", to_utc(self.created_at))

    @property
    def display_time(self) -> str:
        return self.datetime.strftime(DISPLAY_FORMAT)

    def sort_key(self) -> tuple[datetime, str]:
        return (self.datetime, self.id)


class ShowtimeError(Exception):
    """Base class for showtime failures. str() is the chat reply."""


class ValidationError(ShowtimeError):
    """Bad field format or range in a command."""


class DuplicateIdError(ShowtimeError):
    def __init__(self, showtime_id: str) -> None:
        self.showtime_id = showtime_id
        super().__init__(f"Showtime with ID '{showtime_id}' already exists.")


class NotFoundError(ShowtimeError):
    def __init__(self, showtime_id: str) -> None:
        self.showtime_id = showtime_id
        super().__init__(f"Showtime with ID '{showtime_id}' not found.")


class NotAuthorizedError(ShowtimeError):
    def __init__(self, showtime_id: str) -> None:
        self.showtime_id = showtime_id
        super().__init__("You can only delete showtimes you created.")


class StorageError(ShowtimeError):
    """Persistence backend failure. Not shown verbatim to users."""
