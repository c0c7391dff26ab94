"""IRC provider built on asyncio streams.

Connection lifecycle:
1. NICK/USER registration
2. On welcome (001): optional NickServ IDENTIFY, then JOIN the channel
3. PING is answered with PONG; PRIVMSG lines become IncomingMessages
4. A dropped connection is retried after RECONNECT_DELAY until stop()

Incoming messages are queued and handled by a single worker task so a
slow handler never stalls the socket reader (and with it PING replies).
"""

import asyncio
import logging
from dataclasses import dataclass, field

from marquee.providers.base import (
    IncomingMessage,
    MessageHandler,
    OutgoingMessage,
    Provider,
)

logger = logging.getLogger(__name__)

# RFC 1459 line limit including CRLF
MAX_LINE_BYTES = 512
IDENTIFY_DELAY = 2.0
RECONNECT_DELAY = 30.0


@dataclass
class IrcLine:
    """A parsed IRC protocol line."""

    command: str
    params: list[str] = field(default_factory=list)
    prefix: str = ""

    @property
    def nick(self) -> str:
        return self.prefix.split("!", 1)[0]

    @property
    def host(self) -> str:
        _, _, host = self.prefix.partition("@")
        return host

    @property
    def trailing(self) -> str:
        return self.params[-1] if self.params else ""


def parse_irc_line(line: str) -> IrcLine:
    """Parse one raw IRC line (without CRLF).

    >>> parse_irc_line(":nick!user@host PRIVMSG #chan :hello there").params
    ['#chan', 'hello there']
    """
    line = line.rstrip("\r\n")
    prefix = ""
    if line.startswith("@"):
        # IRCv3 message tags are not used
        _, _, line = line.partition(" ")
    if line.startswith(":"):
        prefix, _, line = line[1:].partition(" ")

    trailing: str | None = None
    if " :" in line:
        line, trailing = line.split(" :", 1)
    elif line.startswith(":"):
        line, trailing = "", line[1:]

    parts = line.split()
    command = parts[0].upper() if parts else ""
    params = parts[1:]
    if trailing is not None:
        params.append(trailing)
    return IrcLine(command=command, params=params, prefix=prefix)


def split_address(address: str, default_port: int = 6667) -> tuple[str, int]:
    """Split ``host:port`` into its parts."""
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, default_port
    return host, int(port)


class IrcProvider(Provider):
    """Minimal IRC client for a single channel."""

    def __init__(
        self,
        server: str,
        nick: str,
        channel: str,
        nickserv_password: str | None = None,
    ) -> None:
        self._host, self._port = split_address(server)
        self._nick = nick
        self._channel = channel
        self._nickserv_password = nickserv_password
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._handler: MessageHandler | None = None
        self._queue: asyncio.Queue[IncomingMessage] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._running = False

    @property
    def name(self) -> str:
        return "irc"

    @property
    def channel(self) -> str:
        return self._channel

    async def start(self, handler: MessageHandler) -> None:
        """Connect and process lines until stopped, reconnecting on drops."""
        self._handler = handler
        self._running = True
        self._worker = asyncio.create_task(self._process_queue())

        try:
            while self._running:
                try:
                    await self._run_session()
                except OSError as e:
                    logger.warning(
                        "irc_connection_failed", extra={"error.message": str(e)}
                    )
                if self._running:
                    logger.info(
                        "irc_reconnecting", extra={"irc.delay": RECONNECT_DELAY}
                    )
                    await asyncio.sleep(RECONNECT_DELAY)
        finally:
            await self.stop()

    async def stop(self) -> None:
        if not self._running:
            return  # Already stopped
        self._running = False

        if self._worker and not self._worker.done():
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass

        await self._close_connection()
        logger.info("irc_stopped")

    async def _run_session(self) -> None:
        """Register on a fresh connection and read until it closes."""
        logger.info(
            "irc_connecting",
            extra={"irc.server": f"{self._host}:{self._port}", "irc.nick": self._nick},
        )
        self._reader, self._writer = await asyncio.open_connection(
            self._host, self._port
        )
        try:
            await self._send_raw(f"NICK {self._nick}")
            await self._send_raw(f"USER {self._nick} 0 * :{self._nick}")

            while self._running:
                raw = await self._reader.readline()
                if not raw:
                    logger.warning("irc_connection_closed")
                    break
                await self._handle_line(raw.decode("utf-8", errors="replace"))
        finally:
            await self._close_connection()

    async def _close_connection(self) -> None:
        writer, self._writer = self._writer, None
        self._reader = None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error closing IRC connection: {e}")

    async def send(self, message: OutgoingMessage) -> None:
        for line in message.text.splitlines() or [""]:
            await self._send_raw(f"PRIVMSG {message.channel} :{line}")

    async def _send_raw(self, line: str) -> None:
        if self._writer is None:
            raise RuntimeError("IRC provider is not connected")
        # Trim to the byte limit without splitting a multi-byte character
        data = line.encode("utf-8")[: MAX_LINE_BYTES - 2]
        data = data.decode("utf-8", errors="ignore").encode("utf-8")
        self._writer.write(data + b"\r\n")
        await self._writer.drain()

    async def _handle_line(self, raw: str) -> None:
        line = parse_irc_line(raw)
        if line.command == "PING":
            await self._send_raw(f"PONG :{line.trailing}")
        elif line.command == "001":
            await self._on_welcome()
        elif line.command == "PRIVMSG" and len(line.params) >= 2:
            await self._queue.put(
                IncomingMessage(
                    channel=line.params[0],
                    nick=line.nick,
                    host=line.host,
                    text=line.trailing,
                )
            )

    async def _on_welcome(self) -> None:
        if self._nickserv_password:
            await self._send_raw(
                f"PRIVMSG NickServ :IDENTIFY {self._nickserv_password}"
            )
            # Give services time to apply the cloak before joining
            await asyncio.sleep(IDENTIFY_DELAY)
        await self._send_raw(f"JOIN {self._channel}")
        logger.info("irc_joined", extra={"irc.channel": self._channel})

    async def _process_queue(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                if self._handler:
                    await self._handler(message)
            except Exception:
                logger.exception("irc_handler_failed")
            finally:
                self._queue.task_done()
