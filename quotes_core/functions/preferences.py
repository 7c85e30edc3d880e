import random
from typing import Any, Callable, Dict, Optional

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
)

# None keeps the previous value
DARK_BG_BY_TYPE: Dict[BgType, Optional[bool]] = {
    BgType.WHITE: False,
    BgType.BLACK: True,
    BgType.RANDOM: None,
}


def _random_dark_bg(rng: Optional[random.Random]) -> bool:
    source = rng or random
    return bool(source.randint(0, 1))


def _on_quotes_loaded(state: PreferenceState, action: QuotesLoaded, rng) -> PreferenceState:
    return state.model_copy(update={"quotes_loaded": True})


def _on_next_quote(state: PreferenceState, action: NextQuoteSelected, rng) -> PreferenceState:
    update: Dict[str, Any] = {"current_quote": action.snapshot}
    if state.bg_type == BgType.RANDOM:
        update["is_dark_bg"] = _random_dark_bg(rng)
    return state.model_copy(update=update)


def _on_bookmark_toggled(state: PreferenceState, action: BookmarkToggled, rng) -> PreferenceState:
    if state.current_quote is None:
        return state
    current = state.current_quote
    toggled = current.model_copy(update={"bookmarked": not current.bookmarked})
    return state.model_copy(update={"current_quote": toggled})


def _on_background_changed(state: PreferenceState, action: BackgroundChanged, rng) -> PreferenceState:
    dark = DARK_BG_BY_TYPE[action.bg_type]
    return state.model_copy(update={
        "bg_type": action.bg_type,
        "is_dark_bg": state.is_dark_bg if dark is None else dark,
    })


def _on_category_toggled(state: PreferenceState, action: CategoryToggled, rng) -> PreferenceState:
    if action.category not in state.categories:
        return state
    categories = dict(state.categories)
    categories[action.category] = not categories[action.category]
    return state.with_categories(categories)


def _on_all_categories_selected(state: PreferenceState, action: AllCategoriesSelected, rng) -> PreferenceState:
    return state.with_categories({name: True for name in state.categories})


def _on_favorites_toggled(state: PreferenceState, action: FavoritesToggled, rng) -> PreferenceState:
    return state.model_copy(update={"show_favorites": not state.show_favorites})


_HANDLERS: Dict[type, Callable[..., PreferenceState]] = {
    QuotesLoaded: _on_quotes_loaded,
    NextQuoteSelected: _on_next_quote,
    BookmarkToggled: _on_bookmark_toggled,
    BackgroundChanged: _on_background_changed,
    CategoryToggled: _on_category_toggled,
    AllCategoriesSelected: _on_all_categories_selected,
    FavoritesToggled: _on_favorites_toggled,
}


def reduce(state: PreferenceState, action: Any, rng: Optional[random.Random] = None) -> PreferenceState:
    """
    Apply one action to the preference state and return the new state.

    - Never mutates ``state``; unchanged transitions return it as is
    - Unrecognized actions (including None) are identity transitions
    - ``rng`` only drives the background roll for BgType.RANDOM
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action, rng)
