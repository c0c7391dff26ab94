"""Showtime domain: records, storage, argument parsing and durations.

Public API:
- ShowtimeStore: Async storage contract
- MemoryShowtimeStore: In-process backend
- SqlShowtimeStore: SQLAlchemy backend
- parse_create_args: Parse `-create` flags into a CreateRequest
- format_until / format_since: Human-readable durations

Types:
- Showtime: A scheduled movie event
- RecencyPolicy: How "currently playing" is decided
"""

from marquee.showtimes.durations import format_since, format_until
from marquee.showtimes.fields import (
    CreateRequest,
    PartialDate,
    parse_create_args,
    parse_date_string,
)
from marquee.showtimes.sql_store import SqlShowtimeStore
from marquee.showtimes.store import (
    MemoryShowtimeStore,
    ShowtimeStore,
    select_current,
    select_next,
)
from marquee.showtimes.types import (
    DuplicateIdError,
    NotAuthorizedError,
    NotFoundError,
    RecencyPolicy,
    Showtime,
    ShowtimeError,
    StorageError,
    ValidationError,
)

__all__ = [
    "CreateRequest",
    "DuplicateIdError",
    "MemoryShowtimeStore",
    "NotAuthorizedError",
    "NotFoundError",
    "PartialDate",
    "RecencyPolicy",
    "Showtime",
    "ShowtimeError",
    "ShowtimeStore",
    "SqlShowtimeStore",
    "StorageError",
    "ValidationError",
    "format_since",
    "format_until",
    "parse_create_args",
    "parse_date_string",
    "select_current",
    "select_next",
]
