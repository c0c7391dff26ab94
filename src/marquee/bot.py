"""Glue between a chat provider and the command dispatcher."""

import logging
from collections.abc import Collection

from marquee.auth import is_authorized
from marquee.dispatcher import CommandDispatcher
from marquee.providers.base import IncomingMessage, OutgoingMessage, Provider

logger = logging.getLogger(__name__)


class MarqueeBot:
    """Answers showtime commands in a single channel.

    Only messages addressed to the configured channel are considered.
    A failure while handling one message is logged and never stops the
    provider loop.
    """

    def __init__(
        self,
        provider: Provider,
        dispatcher: CommandDispatcher,
        channel: str,
        authorized_nicks: Collection[str] = (),
    ) -> None:
        self._provider = provider
        self._dispatcher = dispatcher
        self._channel = channel
        self._authorized_nicks = frozenset(authorized_nicks)

    async def run(self) -> None:
        """Start the provider and handle messages until it stops."""
        await self._provider.start(self.handle_message)

    async def stop(self) -> None:
        await self._provider.stop()

    async def handle_message(self, message: IncomingMessage) -> None:
        if message.channel != self._channel:
            return

        authorized = is_authorized(message.nick, message.host, self._authorized_nicks)
        try:
            replies = await self._dispatcher.dispatch(
                message.text, message.nick, authorized
            )
        except Exception:
            logger.exception(
                "command_failed",
                extra={"irc.nick": message.nick, "irc.text": message.text},
            )
            return

        for reply in replies:
            await self._provider.send(OutgoingMessage(channel=self._channel, text=reply))
        if replies:
            logger.info(
                "command_handled",
                extra={"irc.nick": message.nick, "reply.lines": len(replies)},
            )
