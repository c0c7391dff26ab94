"""Abstract provider interface for chat transports."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass


@dataclass
class IncomingMessage:
    """Message received from a provider."""

    channel: str
    nick: str
    text: str
    host: str = ""


@dataclass
class OutgoingMessage:
    """Message to send via a provider."""

    channel: str
    text: str


# Type for message handler callback
MessageHandler = Callable[[IncomingMessage], Awaitable[None]]


class Provider(ABC):
    """Abstract interface for chat transports.

    A provider delivers incoming channel lines tagged with sender identity
    and accepts outgoing text lines.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'irc')."""
        ...

    @abstractmethod
    async def start(self, handler: MessageHandler) -> None:
        """Start the provider and deliver messages until stopped.

        Args:
            handler: Callback to handle incoming messages.
        """
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the provider and clean up resources."""
        ...

    @abstractmethod
    async def send(self, message: OutgoingMessage) -> None:
        """Send a message.

        Args:
            message: Message to send.
        """
        ...
