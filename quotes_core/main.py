import logging
import random
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from quotes_core.config import Settings, settings as default_settings
from quotes_core.database import create_engine, init_models
from quotes_core.exceptions import SeedFailure
from quotes_core.functions.quote_store import SeedRecord, SqlQuoteStore
from quotes_core.functions.selection import SelectionEngine
from quotes_core.functions.session import QuotesSession
from quotes_core.logging_config import setup_logging

logger = logging.getLogger("quotes_core")


async def bootstrap(
    config: Optional[Settings] = None,
    records: Optional[Iterable[SeedRecord]] = None,
    rng: Optional[random.Random] = None,
    configure_logging: bool = True,
) -> QuotesSession:
    """
    Build the store, engine and session from settings.

    When ``records`` is given the store is seeded on first run only. A seed
    failure propagates as SeedFailure; startup should abort on it.
    """
    config = config or default_settings
    if configure_logging:
        setup_logging(config)

    logger.info(f"🚀 quotes_core starting ({config.ENVIRONMENT})", extra={'color': True})

    engine = None
    try:
        engine = create_engine(config=config)
        await init_models(engine)

        store = SqlQuoteStore(engine)
        session = QuotesSession(SelectionEngine(store), rng=rng)

        if records is not None:
            await session.ensure_loaded(records)
    except SeedFailure:
        if engine is not None:
            await engine.dispose()
        raise
    except SQLAlchemyError as e:
        logger.error(f"❌ Could not open quotes store at {config.DB_URL}: {e}", extra={'color': True})
        if engine is not None:
            await engine.dispose()
        raise SeedFailure(f"Failed to open quotes store: {e}") from e

    logger.info("✅ quotes_core ready", extra={'color': True})
    return session


async def shutdown(session: QuotesSession) -> None:
    store = session.engine.store
    engine = getattr(store, "engine", None)
    if engine is not None:
        await engine.dispose()
    logger.info("🛑 quotes_core stopped", extra={'color': True})
