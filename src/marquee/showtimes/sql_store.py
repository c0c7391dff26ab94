"""Showtime store backed by a relational table."""

from __future__ import annotations

import logging
from datetime import UTC

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from marquee.db import Database, ShowtimeRecord
from marquee.showtimes.store import Clock, ShowtimeStore
from marquee.showtimes.types import Showtime, StorageError, utc_now

logger = logging.getLogger(__name__)


def _to_record(showtime: Showtime) -> ShowtimeRecord:
    return ShowtimeRecord(
        id=showtime.id,
        title=showtime.title,
        starts_at=showtime.datetime.replace(tzinfo=None),
        created_by=showtime.created_by,
        created_at=showtime.created_at.replace(tzinfo=None),
    )


def _from_record(record: ShowtimeRecord) -> Showtime:
    return Showtime(
        id=record.id,
        title=record.title,
        datetime=record.starts_at.replace(tzinfo=UTC),
        created_by=record.created_by,
        created_at=record.created_at.replace(tzinfo=UTC),
    )


class SqlShowtimeStore(ShowtimeStore):
    """SQLAlchemy-backed store. Driver errors surface as StorageError."""

    def __init__(self, database: Database, clock: Clock = utc_now) -> None:
        super().__init__(clock)
        self._database = database

    async def _insert(self, showtime: Showtime) -> bool:
        try:
            async with self._database.session() as session:
                if await session.get(ShowtimeRecord, showtime.id) is not None:
                    return False
                session.add(_to_record(showtime))
        except IntegrityError:
            # Lost a race with another writer on the same database
            return False
        except SQLAlchemyError as e:
            logger.exception("showtime_insert_failed")
            raise StorageError(str(e)) from e
        return True

    async def _fetch(self, showtime_id: str) -> Showtime | None:
        try:
            async with self._database.session() as session:
                record = await session.get(ShowtimeRecord, showtime_id)
                return _from_record(record) if record else None
        except SQLAlchemyError as e:
            logger.exception("showtime_fetch_failed")
            raise StorageError(str(e)) from e

    async def _fetch_all(self) -> list[Showtime]:
        stmt = select(ShowtimeRecord).order_by(
            ShowtimeRecord.starts_at, ShowtimeRecord.id
        )
        try:
            async with self._database.session() as session:
                result = await session.execute(stmt)
                return [_from_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.exception("showtime_list_failed")
            raise StorageError(str(e)) from e

    async def _remove(self, showtime_id: str) -> None:
        stmt = delete(ShowtimeRecord).where(ShowtimeRecord.id == showtime_id)
        try:
            async with self._database.session() as session:
                await session.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("showtime_delete_failed")
            raise StorageError(str(e)) from e

    async def close(self) -> None:
        await self._database.disconnect()
