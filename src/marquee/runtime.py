"""Build runtime components from configuration."""

import logging

from marquee.bot import MarqueeBot
from marquee.config import MarqueeConfig
from marquee.db import Database
from marquee.dispatcher import CommandDispatcher
from marquee.providers import IrcProvider, Provider
from marquee.showtimes import MemoryShowtimeStore, ShowtimeStore, SqlShowtimeStore

logger = logging.getLogger(__name__)


async def create_store(config: MarqueeConfig) -> ShowtimeStore:
    """Create and connect the configured showtime store."""
    settings = config.showtimes
    if settings.backend == "memory":
        logger.info("showtime_store_ready", extra={"store.backend": "memory"})
        return MemoryShowtimeStore()

    database = Database(database_path=settings.database_path.expanduser())
    await database.connect()
    logger.info(
        "showtime_store_ready",
        extra={"store.backend": "sqlite", "store.path": str(database.path)},
    )
    return SqlShowtimeStore(database)


def create_dispatcher(config: MarqueeConfig, store: ShowtimeStore) -> CommandDispatcher:
    settings = config.showtimes
    return CommandDispatcher(
        store,
        prefix=config.irc.command_prefix,
        policy=settings.recency_policy,
        window=settings.current_window,
        storage_timeout=settings.storage_timeout,
    )


def create_bot(
    config: MarqueeConfig,
    store: ShowtimeStore,
    provider: Provider | None = None,
) -> MarqueeBot:
    """Wire a bot for the configured channel.

    A provider can be injected (tests); otherwise an IrcProvider is built.
    """
    irc = config.irc
    if provider is None:
        password = irc.nickserv_password
        provider = IrcProvider(
            server=irc.server,
            nick=irc.nick,
            channel=irc.channel,
            nickserv_password=password.get_secret_value() if password else None,
        )
    return MarqueeBot(
        provider,
        create_dispatcher(config, store),
        channel=irc.channel,
        authorized_nicks=irc.authorized_nicks,
    )
