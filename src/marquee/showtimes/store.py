"""Showtime storage.

ShowtimeStore defines the contract shared by every backend; the
"current" / "next" queries are computed from list_all() so that all
backends resolve them identically.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from marquee.showtimes.types import (
    DuplicateIdError,
    NotAuthorizedError,
    NotFoundError,
    RecencyPolicy,
    Showtime,
    to_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def select_next(showtimes: Iterable[Showtime], now: datetime) -> Showtime | None:
    """Earliest showtime strictly after now, ties broken by id."""
    now = to_utc(now)
    upcoming = [s for s in showtimes if s.datetime > now]
    return min(upcoming, key=Showtime.sort_key, default=None)


def select_current(
    showtimes: Iterable[Showtime],
    now: datetime,
    window: timedelta | None = None,
) -> Showtime | None:
    """Most recently started showtime at or before now.

    With a window, only showtimes that started within [now - window, now]
    qualify. Ties on start time resolve to the smallest id.
    """
    now = to_utc(now)
    started = [s for s in showtimes if s.datetime <= now]
    if window is not None:
        cutoff = now - window
        started = [s for s in started if s.datetime >= cutoff]
    if not started:
        return None
    latest = max(s.datetime for s in started)
    return min((s for s in started if s.datetime == latest), key=lambda s: s.id)


class ShowtimeStore(ABC):
    """Async contract for showtime persistence.

    Implementations serialize every operation under one lock so callers
    never observe a partially applied create or delete.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Backend primitives
    # ------------------------------------------------------------------

    @abstractmethod
    async def _insert(self, showtime: Showtime) -> bool:
        """Insert unless the id exists. Returns False on conflict."""
        ...

    @abstractmethod
    async def _fetch(self, showtime_id: str) -> Showtime | None: ...

    @abstractmethod
    async def _fetch_all(self) -> list[Showtime]: ...

    @abstractmethod
    async def _remove(self, showtime_id: str) -> None: ...

    async def close(self) -> None:
        """Release backend resources."""

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def create(
        self, showtime_id: str, title: str, when: datetime, creator: str
    ) -> Showtime:
        showtime = Showtime(
            id=showtime_id,
            title=title,
            datetime=when,
            created_by=creator,
            created_at=self._clock(),
        )
        async with self._lock:
            if not await self._insert(showtime):
                raise DuplicateIdError(showtime_id)
        logger.info(
            "showtime_created",
            extra={
                "showtime.id": showtime.id,
                "showtime.datetime": showtime.datetime.isoformat(),
                "showtime.created_by": creator,
            },
        )
        return showtime

    async def delete(self, showtime_id: str, requester: str) -> Showtime:
        async with self._lock:
            existing = await self._fetch(showtime_id)
            if existing is None:
                raise NotFoundError(showtime_id)
            if existing.created_by != requester:
                logger.warning(
                    "showtime_delete_denied",
                    extra={"showtime.id": showtime_id, "requester": requester},
                )
                raise NotAuthorizedError(showtime_id)
            await self._remove(showtime_id)
        logger.info("showtime_deleted", extra={"showtime.id": showtime_id})
        return existing

    async def get(self, showtime_id: str) -> Showtime | None:
        async with self._lock:
            return await self._fetch(showtime_id)

    async def list_all(self) -> list[Showtime]:
        async with self._lock:
            showtimes = await self._fetch_all()
        return sorted(showtimes, key=Showtime.sort_key)

    async def find_next(self, now: datetime) -> Showtime | None:
        return select_next(await self.list_all(), now)

    async def find_current(
        self, now: datetime, window: timedelta | None = None
    ) -> Showtime | None:
        return select_current(await self.list_all(), now, window)

    async def whats_playing(
        self,
        now: datetime,
        policy: RecencyPolicy = RecencyPolicy.BOUNDED,
        window: timedelta = timedelta(hours=3),
    ) -> tuple[Showtime | None, Showtime | None]:
        """Resolve (current, next) from a single consistent snapshot."""
        showtimes = await self.list_all()
        effective_window = window if policy == RecencyPolicy.BOUNDED else None
        return (
            select_current(showtimes, now, effective_window),
            select_next(showtimes, now),
        )


class MemoryShowtimeStore(ShowtimeStore):
    """In-process store backed by a dict."""

    def __init__(self, clock: Clock = utc_now) -> None:
        super().__init__(clock)
        self._showtimes: dict[str, Showtime] = {}

    async def _insert(self, showtime: Showtime) -> bool:
        if showtime.id in self._showtimes:
            return False
        self._showtimes[showtime.id] = showtime
        return True

    async def _fetch(self, showtime_id: str) -> Showtime | None:
        return self._showtimes.get(showtime_id)

    async def _fetch_all(self) -> list[Showtime]:
        return list(self._showtimes.values())

    async def _remove(self, showtime_id: str) -> None:
        self._showtimes.pop(showtime_id, None)
