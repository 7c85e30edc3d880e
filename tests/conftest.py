"""Shared fixtures: a SQLite-backed store, an in-memory store double, seed data."""

from __future__ import annotations

import random
from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio

from quotes_core.config import Settings
from quotes_core.database import create_engine, init_models
from quotes_core.functions.quote_store import SqlQuoteStore
from quotes_core.functions.selection import SelectionEngine
from quotes_core.functions.session import QuotesSession
from tests.support.in_memory_store import InMemoryQuoteStore


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DB_URL="sqlite+aiosqlite:///:memory:",
        LOG_DIR=str(tmp_path / "logs"),
        LOG_COLORS="false",
        LOG_TO_FILE="false",
        ENVIRONMENT="test",
    )


@pytest_asyncio.fixture
async def sql_store(test_settings: Settings) -> AsyncIterator[SqlQuoteStore]:
    """Provide a store over a fresh in-memory SQLite database."""
    engine = create_engine(config=test_settings)
    await init_models(engine)
    yield SqlQuoteStore(engine)
    await engine.dispose()


@pytest.fixture
def memory_store() -> InMemoryQuoteStore:
    return InMemoryQuoteStore()


@pytest.fixture
def two_quotes() -> list[dict[str, Any]]:
    return [
        {"quote": "A", "author": "X", "category": "inspire"},
        {"quote": "B", "author": "Y", "category": "funny"},
    ]


@pytest.fixture
def mixed_quotes() -> list[dict[str, Any]]:
    """Several quotes per category, one without an author."""
    return [
        {"quote": "Dream big.", "author": "Ann", "category": "inspire"},
        {"quote": "Ship it.", "author": "Bob", "category": "management"},
        {"quote": "Keep going.", "category": "inspire"},
        {"quote": "Laugh daily.", "author": "Cy", "category": "funny"},
        {"quote": "Run the race.", "author": "Di", "category": "sports"},
        {"quote": "Never settle.", "author": "Ed", "category": "inspire"},
    ]


@pytest_asyncio.fixture
async def sql_session(sql_store: SqlQuoteStore) -> QuotesSession:
    return QuotesSession(SelectionEngine(sql_store), rng=random.Random(7))
