import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError
from sqlalchemy import func, not_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from quotes_core.database import create_session_factory
from quotes_core.exceptions import QuoteNotFoundError, SeedFailure
from quotes_core.models.quote import Quote
from quotes_core.schema.quote import QuoteFilter, QuoteSeed, QuoteSnapshot

logger = logging.getLogger("quotes_core")

SeedRecord = Union[QuoteSeed, Mapping[str, Any]]


class QuoteStore(Protocol):
    """Transactional storage of quotes behind a category/bookmark filter."""

    async def seed(self, records: Iterable[SeedRecord]) -> int: ...

    async def count(self) -> int: ...

    async def get(self, quote_id: int) -> QuoteSnapshot: ...

    async def query_least_shown(self, quote_filter: QuoteFilter) -> Optional[QuoteSnapshot]: ...

    async def record_shown(self, quote_id: int) -> QuoteSnapshot: ...

    async def toggle_bookmark(self, quote_id: int) -> QuoteSnapshot: ...

    async def select_and_record(self, quote_filter: QuoteFilter) -> Optional[QuoteSnapshot]: ...


def validate_seed_records(records: Iterable[SeedRecord]) -> List[QuoteSeed]:
    """Validate the dataset up front so a bad record never reaches the store"""
    try:
        return [
            record if isinstance(record, QuoteSeed) else QuoteSeed.model_validate(record)
            for record in records
        ]
    except ValidationError as e:
        logger.error(f"❌ Seed dataset rejected: {e}", extra={'color': True})
        raise SeedFailure(f"Invalid seed dataset: {e}") from e


def least_shown_statement(quote_filter: QuoteFilter):
    stmt = select(Quote).where(Quote.category.in_(sorted(quote_filter.categories)))
    if quote_filter.favorites_only:
        stmt = stmt.where(Quote.bookmarked == True)
    return stmt.order_by(Quote.displayed_times.asc(), Quote.id.asc()).limit(1)


class SqlQuoteStore:
    """
    QuoteStore backed by an async SQLAlchemy engine.

    Every operation runs in its own session and transaction. Transactions of
    one store are serialized by an asyncio lock, so a read-then-write never
    interleaves with another caller's transaction.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._lock = asyncio.Lock()

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        async with self._lock:
            async with self._session_factory() as db:
                try:
                    yield db
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise

    async def seed(self, records: Iterable[SeedRecord]) -> int:
        seeds = validate_seed_records(records)
        rows = [
            Quote(
                id=index,
                quote=seed.quote,
                author=seed.resolved_author,
                category=seed.category.value,
                displayed_times=0,
                bookmarked=False,
            )
            for index, seed in enumerate(seeds)
        ]

        try:
            async with self.transaction() as db:
                db.add_all(rows)
        except SQLAlchemyError as e:
            logger.error(f"❌ Seeding {len(rows)} quotes failed: {e}", extra={'color': True})
            raise SeedFailure(f"Failed to seed quotes: {e}") from e

        logger.info(f"✅ Seeded {len(rows)} quotes", extra={'color': True})
        return len(rows)

    async def count(self) -> int:
        async with self.transaction() as db:
            result = await db.execute(select(func.count()).select_from(Quote))
            return result.scalar_one()

    async def get(self, quote_id: int) -> QuoteSnapshot:
        async with self.transaction() as db:
            row = await db.get(Quote, quote_id)
            if row is None:
                raise QuoteNotFoundError(quote_id)
            return QuoteSnapshot.from_record(row)

    async def query_least_shown(self, quote_filter: QuoteFilter) -> Optional[QuoteSnapshot]:
        if quote_filter.is_empty:
            return None
        async with self.transaction() as db:
            row = (await db.execute(least_shown_statement(quote_filter))).scalars().first()
            return QuoteSnapshot.from_record(row) if row is not None else None

    async def record_shown(self, quote_id: int) -> QuoteSnapshot:
        async with self.transaction() as db:
            return await self._increment(db, quote_id)

    async def toggle_bookmark(self, quote_id: int) -> QuoteSnapshot:
        async with self.transaction() as db:
            stmt = (
                update(Quote)
                .where(Quote.id == quote_id)
                .values(bookmarked=not_(Quote.bookmarked))
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            if result.rowcount == 0:
                raise QuoteNotFoundError(quote_id)
            snapshot = await self._load(db, quote_id)

        logger.info(
            f"🔖 Quote {quote_id} {'bookmarked' if snapshot.bookmarked else 'unbookmarked'}",
            extra={'color': True},
        )
        return snapshot

    async def select_and_record(self, quote_filter: QuoteFilter) -> Optional[QuoteSnapshot]:
        if quote_filter.is_empty:
            return None
        async with self.transaction() as db:
            row = (await db.execute(least_shown_statement(quote_filter))).scalars().first()
            if row is None:
                return None
            return await self._increment(db, row.id)

    async def _increment(self, db: AsyncSession, quote_id: int) -> QuoteSnapshot:
        stmt = (
            update(Quote)
            .where(Quote.id == quote_id)
            .values(displayed_times=Quote.displayed_times + 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        if result.rowcount == 0:
            raise QuoteNotFoundError(quote_id)
        return await self._load(db, quote_id)

    async def _load(self, db: AsyncSession, quote_id: int) -> QuoteSnapshot:
        stmt = select(Quote).where(Quote.id == quote_id).execution_options(populate_existing=True)
        row = (await db.execute(stmt)).scalars().one()
        return QuoteSnapshot.from_record(row)
