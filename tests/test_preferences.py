"""Tests for the preference reducer and the action boundary."""

from __future__ import annotations

import random

import pytest
from pydantic import ValidationError

from quotes_core.functions.preferences import reduce
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
    parse_action,
)
from quotes_core.schema.quote import CATEGORY_NAMES, QuoteSnapshot


def _snapshot(**overrides) -> QuoteSnapshot:
    fields = dict(id=3, quote="Stay hungry.", author="Unknown", category="inspire",
                  displayed_times=1, bookmarked=False)
    fields.update(overrides)
    return QuoteSnapshot(**fields)


class _FixedRandom(random.Random):
    def __init__(self, value: int):
        super().__init__()
        self.value = value

    def randint(self, a, b):
        return self.value


class TestInitialState:
    def test_defaults(self):
        state = initial_state()

        assert state.quotes_loaded is False
        assert state.current_quote is None
        assert state.is_dark_bg is False
        assert state.bg_type == BgType.RANDOM
        assert state.show_favorites is False
        assert set(state.categories) == set(CATEGORY_NAMES)
        assert state.active_categories == frozenset({"inspire"})

    def test_categories_are_read_only(self):
        state = initial_state()

        with pytest.raises(TypeError):
            state.categories["love"] = True
        assert state.categories["love"] is False

    def test_reduced_categories_stay_read_only(self):
        state = reduce(initial_state(), CategoryToggled(category="love"))
        state = reduce(state, AllCategoriesSelected())

        with pytest.raises(TypeError):
            state.categories["art"] = False

    def test_constructed_categories_are_copied(self):
        source = {name: False for name in CATEGORY_NAMES}
        state = PreferenceState(categories=source)

        source["love"] = True

        assert state.active_categories == frozenset()
        assert state.model_dump()["categories"] == {name: False for name in CATEGORY_NAMES}


class TestReduce:
    def test_quotes_loaded(self):
        assert reduce(initial_state(), QuotesLoaded()).quotes_loaded is True

    def test_next_quote_random_background_rolls(self):
        quote = _snapshot()

        dark = reduce(initial_state(), NextQuoteSelected(snapshot=quote), _FixedRandom(1))
        light = reduce(dark, NextQuoteSelected(snapshot=quote), _FixedRandom(0))

        assert dark.current_quote == quote
        assert dark.is_dark_bg is True
        assert light.is_dark_bg is False

    @pytest.mark.parametrize("bg_type, expected", [(BgType.WHITE, False), (BgType.BLACK, True)])
    def test_next_quote_fixed_background_keeps_color(self, bg_type, expected):
        state = reduce(initial_state(), BackgroundChanged(bg_type=bg_type))

        for roll in (0, 1):
            state = reduce(state, NextQuoteSelected(snapshot=_snapshot()), _FixedRandom(roll))
            assert state.is_dark_bg is expected

    def test_bookmark_toggled_flips_local_copy(self):
        quote = _snapshot()
        state = reduce(initial_state(), NextQuoteSelected(snapshot=quote))

        toggled = reduce(state, BookmarkToggled())

        assert toggled.current_quote.bookmarked is True
        assert quote.bookmarked is False
        assert reduce(toggled, BookmarkToggled()).current_quote.bookmarked is False

    def test_bookmark_toggled_without_quote_is_identity(self):
        state = initial_state()

        assert reduce(state, BookmarkToggled()) is state

    def test_background_white_and_black(self):
        dark = reduce(initial_state(), BackgroundChanged(bg_type=BgType.BLACK))
        light = reduce(dark, BackgroundChanged(bg_type=BgType.WHITE))

        assert (dark.bg_type, dark.is_dark_bg) == (BgType.BLACK, True)
        assert (light.bg_type, light.is_dark_bg) == (BgType.WHITE, False)

    @pytest.mark.parametrize("previous", [BgType.WHITE, BgType.BLACK])
    def test_background_random_keeps_previous_color(self, previous):
        before = reduce(initial_state(), BackgroundChanged(bg_type=previous))

        after = reduce(before, BackgroundChanged(bg_type=BgType.RANDOM))

        assert after.bg_type == BgType.RANDOM
        assert after.is_dark_bg == before.is_dark_bg

    def test_category_toggled(self):
        state = reduce(initial_state(), CategoryToggled(category="love"))
        state = reduce(state, CategoryToggled(category="inspire"))

        assert state.active_categories == frozenset({"love"})

    def test_unknown_category_is_identity(self):
        state = initial_state()

        assert reduce(state, CategoryToggled(category="cooking")) is state

    def test_select_all_from_any_state(self):
        state = PreferenceState(categories={name: False for name in CATEGORY_NAMES})
        state = reduce(state, CategoryToggled(category="art"))

        selected = reduce(state, AllCategoriesSelected())

        assert all(selected.categories.values())
        assert set(selected.categories) == set(CATEGORY_NAMES)

    def test_favorites_toggled(self):
        state = reduce(initial_state(), FavoritesToggled())

        assert state.show_favorites is True
        assert reduce(state, FavoritesToggled()).show_favorites is False

    def test_unrecognized_action_is_identity(self):
        state = initial_state()

        assert reduce(state, {"type": "QuotesState/SHARE"}) is state
        assert reduce(state, None) is state

    def test_does_not_mutate_input(self):
        state = initial_state()

        reduce(state, CategoryToggled(category="funny"))
        reduce(state, FavoritesToggled())

        assert state == initial_state()


class TestActionBoundary:
    def test_next_quote_event_payload(self):
        event = NextQuoteSelected(snapshot=_snapshot(bookmarked=True)).to_event()

        assert event == {
            "type": "QuotesState/NEXT_QUOTE",
            "id": 3,
            "quote": "Stay hungry.",
            "author": "Unknown",
            "category": "inspire",
            "displayedTimes": 1,
            "bookmarked": True,
        }

    def test_background_event_payload(self):
        event = BackgroundChanged(bg_type=BgType.BLACK).to_event()

        assert event == {"type": "QuotesState/CHANGE_BG_TYPE", "bgType": "BG_BLACK"}

    def test_parse_round_trips_tagged_events(self):
        actions = [
            QuotesLoaded(),
            NextQuoteSelected(snapshot=_snapshot()),
            BookmarkToggled(),
            BackgroundChanged(bg_type=BgType.WHITE),
            CategoryToggled(category="students"),
            AllCategoriesSelected(),
            FavoritesToggled(),
        ]

        for action in actions:
            assert parse_action(action.to_event()) == action

    def test_parse_unknown_tag_returns_none(self):
        assert parse_action({"type": "QuotesState/SOMETHING_NEW"}) is None

    def test_parse_bad_payload_raises(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "QuotesState/CHANGE_BG_TYPE", "bgType": "BG_PURPLE"})
