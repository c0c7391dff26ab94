"""Shared test fixtures and factories."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from marquee.db.engine import Database
from marquee.dispatcher import CommandDispatcher
from marquee.providers.base import (
    IncomingMessage,
    MessageHandler,
    OutgoingMessage,
    Provider,
)
from marquee.showtimes import MemoryShowtimeStore, SqlShowtimeStore

# Fixed "now" for deterministic time-based assertions
NOW = datetime(2030, 1, 1, 18, 0, 0, tzinfo=UTC)


class FrozenClock:
    """Callable clock that tests can move."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeProvider(Provider):
    """Provider that records outgoing messages and replays incoming ones."""

    def __init__(self, incoming: list[IncomingMessage] | None = None) -> None:
        self.incoming = incoming or []
        self.sent: list[OutgoingMessage] = []
        self.started = False
        self.stopped = False

    @property
    def name(self) -> str:
        return "fake"

    async def start(self, handler: MessageHandler) -> None:
        self.started = True
        for message in self.incoming:
            await handler(message)

    async def stop(self) -> None:
        self.stopped = True

    async def send(self, message: OutgoingMessage) -> None:
        self.sent.append(message)

    @property
    def sent_text(self) -> list[str]:
        return [m.text for m in self.sent]


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def memory_store(clock: FrozenClock) -> MemoryShowtimeStore:
    return MemoryShowtimeStore(clock=clock)


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Create a temporary test database."""
    db = Database(database_path=tmp_path / "test.db")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
async def sql_store(database: Database, clock: FrozenClock) -> SqlShowtimeStore:
    return SqlShowtimeStore(database, clock=clock)


@pytest.fixture(params=["memory", "sql"])
async def store(request, clock: FrozenClock, tmp_path: Path):
    """Every store backend, for contract tests."""
    if request.param == "memory":
        yield MemoryShowtimeStore(clock=clock)
        return
    db = Database(database_path=tmp_path / "contract.db")
    await db.connect()
    sql = SqlShowtimeStore(db, clock=clock)
    yield sql
    await sql.close()


@pytest.fixture
def dispatcher(memory_store: MemoryShowtimeStore, clock: FrozenClock) -> CommandDispatcher:
    return CommandDispatcher(memory_store, prefix=";", clock=clock)


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
[irc]
server = "irc.example.com:6667"
nick = "testbot"
channel = "#testchan"
nickserv_password = "secret"
authorized_nicks = ["alice"]

[showtimes]
backend = "memory"
recency_policy = "unbounded"
"""
    )
    return config_path
