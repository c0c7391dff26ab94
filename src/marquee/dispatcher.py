"""Command dispatcher: chat line in, reply lines out.

Recognised commands (prefix configurable, default "."):
- .showtime -list | -create [options] | -delete="id"  (authorized senders)
- .nextmovie                                          (everyone)
- .date                                               (everyone)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import TypeVar

from marquee.showtimes import (
    DuplicateIdError,
    RecencyPolicy,
    ShowtimeError,
    ShowtimeStore,
    StorageError,
    format_since,
    format_until,
    parse_create_args,
)
from marquee.showtimes.store import Clock
from marquee.showtimes.types import DISPLAY_FORMAT, utc_now
from marquee.tokenizer import tokenize

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

NOTHING_SCHEDULED = "No movies scheduled!"
NO_SHOWTIMES = "No showtimes scheduled."
LIST_HEADER = "Scheduled showtimes:"
STORAGE_FAILURE = "Error processing showtime command."

Handler = Callable[[list[str], str, bool], Awaitable[list[str]]]


class CommandDispatcher:
    """Routes tokenized chat commands to showtime store operations.

    Every recognised command yields at least one reply line. Failures of a
    single command are turned into replies and never propagate.
    """

    def __init__(
        self,
        store: ShowtimeStore,
        *,
        prefix: str = ".",
        policy: RecencyPolicy = RecencyPolicy.BOUNDED,
        window: timedelta = timedelta(hours=3),
        storage_timeout: float | None = 10.0,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._prefix = prefix
        self._policy = policy
        self._window = window
        self._storage_timeout = storage_timeout
        self._clock = clock
        self._handlers: dict[str, Handler] = {
            f"{prefix}showtime": self._handle_showtime,
            f"{prefix}nextmovie": self._handle_nextmovie,
            f"{prefix}date": self._handle_date,
        }

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def usage(self) -> str:
        return f'Usage: {self._prefix}showtime -list | -create [options] | -delete="id"'

    def is_command(self, text: str) -> bool:
        args = tokenize(text)
        return bool(args) and args[0] in self._handlers

    async def dispatch(self, text: str, sender: str, authorized: bool) -> list[str]:
        """Handle one chat line.

        Args:
            text: Raw message text.
            sender: Identity of the sender (IRC nick).
            authorized: Whether the sender may manage showtimes.

        Returns:
            Reply lines; empty when the line is not a command.
        """
        args = tokenize(text)
        if not args:
            return []
        handler = self._handlers.get(args[0])
        if handler is None:
            return []

        try:
            return await handler(args, sender, authorized)
        except ShowtimeError as e:
            if isinstance(e, StorageError):
                logger.error(
                    "showtime_storage_error",
                    extra={"command": args[0], "error.message": str(e)},
                )
                return [STORAGE_FAILURE]
            return [str(e)]
        except TimeoutError:
            logger.error("showtime_storage_timeout", extra={"command": args[0]})
            return [STORAGE_FAILURE]

    async def _call_store(self, operation: Awaitable[_T]) -> _T:
        if self._storage_timeout is None:
            return await operation
        return await asyncio.wait_for(operation, timeout=self._storage_timeout)

    # ------------------------------------------------------------------
    # showtime
    # ------------------------------------------------------------------

    async def _handle_showtime(
        self, args: list[str], sender: str, authorized: bool
    ) -> list[str]:
        if not authorized:
            logger.warning("unauthorized_showtime_command", extra={"sender": sender})
            return [f"{sender}: You are not authorized to use this command."]

        if len(args) < 2:
            return [self.usage]

        action = args[1]
        if action == "-list":
            return await self._list()
        if any(arg.startswith("-delete") for arg in args[1:]):
            return await self._delete(args, sender)
        if action == "-create":
            return await self._create(args[2:], sender)
        return [self.usage]

    async def _list(self) -> list[str]:
        showtimes = await self._call_store(self._store.list_all())
        if not showtimes:
            return [NO_SHOWTIMES]
        lines = [LIST_HEADER]
        for showtime in showtimes:
            lines.append(
                f"[{showtime.id}] {showtime.title} - {showtime.display_time} "
                f"(by {showtime.created_by})"
            )
        return lines

    async def _create(self, args: list[str], sender: str) -> list[str]:
        request = parse_create_args(args)
        # Duplicate ids are reported before any date problem
        if await self._call_store(self._store.get(request.id)) is not None:
            raise DuplicateIdError(request.id)
        when = request.resolve_datetime(self._clock())
        showtime = await self._call_store(
            self._store.create(request.id, request.title, when, sender)
        )
        return [
            f"Created showtime: [{showtime.id}] {showtime.title} - "
            f"{showtime.display_time}"
        ]

    async def _delete(self, args: list[str], sender: str) -> list[str]:
        showtime_id = ""
        for arg in args:
            if arg.startswith("-delete="):
                showtime_id = arg.removeprefix("-delete=").strip('"')
                break
        if not showtime_id:
            return [f'Usage: {self._prefix}showtime -delete="id"']

        await self._call_store(self._store.delete(showtime_id, sender))
        return [f"Deleted showtime: {showtime_id}"]

    # ------------------------------------------------------------------
    # nextmovie / date
    # ------------------------------------------------------------------

    async def _handle_nextmovie(
        self, args: list[str], sender: str, authorized: bool
    ) -> list[str]:
        now = self._clock()
        current, upcoming = await self._call_store(
            self._store.whats_playing(now, self._policy, self._window)
        )
        if current is not None:
            elapsed = format_since(now - current.datetime)
            return [f"{elapsed} into {current.title}"]
        if upcoming is not None:
            remaining = format_until(upcoming.datetime - now)
            return [f"{remaining}, {upcoming.title} is playing!"]
        return [NOTHING_SCHEDULED]

    async def _handle_date(
        self, args: list[str], sender: str, authorized: bool
    ) -> list[str]:
        return [f"Current time (UTC): {self._clock().strftime(DISPLAY_FORMAT)}"]
