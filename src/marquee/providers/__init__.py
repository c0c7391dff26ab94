"""Chat transport providers."""

from marquee.providers.base import (
    IncomingMessage,
    MessageHandler,
    OutgoingMessage,
    Provider,
)
from marquee.providers.irc import IrcLine, IrcProvider, parse_irc_line

__all__ = [
    "IncomingMessage",
    "IrcLine",
    "IrcProvider",
    "MessageHandler",
    "OutgoingMessage",
    "Provider",
    "parse_irc_line",
]
