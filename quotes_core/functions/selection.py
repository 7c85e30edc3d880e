import logging

from quotes_core.exceptions import EmptySelectionError
from quotes_core.functions.quote_store import QuoteStore
from quotes_core.schema.preferences import PreferenceState
from quotes_core.schema.quote import QuoteFilter, QuoteSnapshot

logger = logging.getLogger("quotes_core")


def build_filter(preferences: PreferenceState) -> QuoteFilter:
    return QuoteFilter(
        categories=preferences.active_categories,
        favorites_only=preferences.show_favorites,
    )


class SelectionEngine:
    """Turns display preferences into the next quote and records it as shown."""

    def __init__(self, store: QuoteStore):
        self.store = store

    async def select_next(self, preferences: PreferenceState) -> QuoteSnapshot:
        """
        Pick the least shown quote matching the preferences and bump its counter.

        The lookup and the increment run as one store transaction. Raises
        EmptySelectionError when no category is active or nothing matches.
        """
        quote_filter = build_filter(preferences)
        snapshot = await self.store.select_and_record(quote_filter)
        if snapshot is None:
            logger.warning(
                f"⚠️ No quote matches categories={sorted(quote_filter.categories)} "
                f"favorites_only={quote_filter.favorites_only}",
                extra={'color': True},
            )
            raise EmptySelectionError(quote_filter)

        logger.debug(f"Selected quote {snapshot.id} (shown {snapshot.displayed_times} times)")
        return snapshot

    async def set_bookmark(self, quote_id: int) -> QuoteSnapshot:
        return await self.store.toggle_bookmark(quote_id)
