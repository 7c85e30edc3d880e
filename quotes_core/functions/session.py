import logging
import random
from typing import Any, Iterable, Optional

from quotes_core.exceptions import QuoteNotFoundError
from quotes_core.functions.preferences import reduce
from quotes_core.functions.quote_store import SeedRecord
from quotes_core.functions.selection import SelectionEngine
from quotes_core.schema.preferences import (
    AllCategoriesSelected,
    BackgroundChanged,
    BgType,
    BookmarkToggled,
    CategoryToggled,
    FavoritesToggled,
    NextQuoteSelected,
    PreferenceState,
    QuotesLoaded,
    initial_state,
)
from quotes_core.schema.quote import QuoteSnapshot

logger = logging.getLogger("quotes_core")


class QuotesSession:
    """
    Holds the live preference state and runs UI actions against it.

    Data actions (load, next quote, bookmark) go through the selection
    engine first and then feed their completion action into the reducer.
    Pure actions are reduced immediately, in the order they are dispatched.
    """

    def __init__(
        self,
        engine: SelectionEngine,
        state: Optional[PreferenceState] = None,
        rng: Optional[random.Random] = None,
    ):
        self.engine = engine
        self._state = state or initial_state()
        self._rng = rng

    @property
    def state(self) -> PreferenceState:
        return self._state

    def dispatch(self, action: Any) -> PreferenceState:
        self._state = reduce(self._state, action, self._rng)
        return self._state

    async def load_quotes(self, records: Iterable[SeedRecord]) -> PreferenceState:
        await self.engine.store.seed(records)
        return self.dispatch(QuotesLoaded())

    async def ensure_loaded(self, records: Iterable[SeedRecord]) -> PreferenceState:
        """Seed only when the store is still empty (first run), then mark loaded"""
        existing = await self.engine.store.count()
        if existing == 0:
            return await self.load_quotes(records)

        logger.info(f"📚 Store already holds {existing} quotes, skipping seed", extra={'color': True})
        return self.dispatch(QuotesLoaded())

    async def next_quote(self) -> QuoteSnapshot:
        snapshot = await self.engine.select_next(self._state)
        self.dispatch(NextQuoteSelected(snapshot=snapshot))
        return snapshot

    async def toggle_bookmark(self) -> QuoteSnapshot:
        current = self._state.current_quote
        if current is None:
            raise QuoteNotFoundError(None, "No quote is currently displayed")

        snapshot = await self.engine.set_bookmark(current.id)
        state = self.dispatch(BookmarkToggled())

        # The store is authoritative when it was changed outside this session
        shown = state.current_quote
        if shown is not None and shown.id == snapshot.id and shown.bookmarked != snapshot.bookmarked:
            logger.warning(
                f"⚠️ Quote {snapshot.id} bookmark changed outside the session, resyncing",
                extra={'color': True},
            )
            self._state = state.model_copy(update={
                "current_quote": shown.model_copy(update={"bookmarked": snapshot.bookmarked}),
            })
        return snapshot

    def change_bg_type(self, bg_type: BgType) -> PreferenceState:
        return self.dispatch(BackgroundChanged(bg_type=bg_type))

    def toggle_category(self, category: str) -> PreferenceState:
        return self.dispatch(CategoryToggled(category=category))

    def select_all_categories(self) -> PreferenceState:
        return self.dispatch(AllCategoriesSelected())

    def toggle_favorites(self) -> PreferenceState:
        return self.dispatch(FavoritesToggled())
