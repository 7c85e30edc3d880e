from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from quotes_core.schema.quote import CATEGORY_NAMES, Category, QuoteSnapshot


class BgType(str, Enum):
    WHITE = "BG_WHITE"
    BLACK = "BG_BLACK"
    RANDOM = "BG_RANDOM"


LOAD_QUOTES = "QuotesState/LOAD_QUOTES"
NEXT_QUOTE = "QuotesState/NEXT_QUOTE"
TOGGLE_BOOKMARK = "QuotesState/TOGGLE_BOOKMARK"
CHANGE_BG_TYPE = "QuotesState/CHANGE_BG_TYPE"
TOGGLE_CATEGORY = "QuotesState/TOGGLE_CATEGORY"
TOGGLE_FAVORITES = "QuotesState/TOGGLE_FAVORITES"
SELECT_ALL_CATEGORIES = "QuotesState/SELECT_ALL_CATEGORIES"


def default_categories() -> Mapping[str, bool]:
    return MappingProxyType({name: name == Category.INSPIRE.value for name in CATEGORY_NAMES})


class PreferenceState(BaseModel):
    """Transient display preferences; rebuilt from scratch on every start"""
    model_config = ConfigDict(frozen=True)

    quotes_loaded: bool = False
    current_quote: Optional[QuoteSnapshot] = None
    is_dark_bg: bool = False
    bg_type: BgType = BgType.RANDOM
    show_favorites: bool = False
    # Read-only view; changes go through the reducer
    categories: Mapping[str, bool] = Field(default_factory=default_categories)

    @field_validator("categories", mode="after")
    @classmethod
    def freeze_categories(cls, value: Mapping[str, bool]) -> Mapping[str, bool]:
        return MappingProxyType(dict(value))

    @field_serializer("categories")
    def dump_categories(self, value: Mapping[str, bool]) -> Dict[str, bool]:
        return dict(value)

    def with_categories(self, categories: Mapping[str, bool]) -> "PreferenceState":
        return self.model_copy(update={"categories": MappingProxyType(dict(categories))})

    @property
    def active_categories(self) -> frozenset:
        return frozenset(name for name, enabled in self.categories.items() if enabled)


def initial_state() -> PreferenceState:
    return PreferenceState()


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_event(self) -> Dict[str, Any]:
        """Tagged dict form consumed by the UI layer"""
        return self.model_dump(mode="json", by_alias=True)


class QuotesLoaded(_Action):
    type: Literal["QuotesState/LOAD_QUOTES"] = LOAD_QUOTES


class NextQuoteSelected(_Action):
    type: Literal["QuotesState/NEXT_QUOTE"] = NEXT_QUOTE
    snapshot: QuoteSnapshot

    def to_event(self) -> Dict[str, Any]:
        return {"type": self.type, **self.snapshot.model_dump(mode="json", by_alias=True)}


class BookmarkToggled(_Action):
    type: Literal["QuotesState/TOGGLE_BOOKMARK"] = TOGGLE_BOOKMARK


class BackgroundChanged(_Action):
    type: Literal["QuotesState/CHANGE_BG_TYPE"] = CHANGE_BG_TYPE
    bg_type: BgType = Field(..., alias="bgType")


class CategoryToggled(_Action):
    type: Literal["QuotesState/TOGGLE_CATEGORY"] = TOGGLE_CATEGORY
    category: str


class AllCategoriesSelected(_Action):
    type: Literal["QuotesState/SELECT_ALL_CATEGORIES"] = SELECT_ALL_CATEGORIES


class FavoritesToggled(_Action):
    type: Literal["QuotesState/TOGGLE_FAVORITES"] = TOGGLE_FAVORITES


Action = Union[
    QuotesLoaded,
    NextQuoteSelected,
    BookmarkToggled,
    BackgroundChanged,
    CategoryToggled,
    AllCategoriesSelected,
    FavoritesToggled,
]

_ACTIONS_BY_TYPE = {
    LOAD_QUOTES: QuotesLoaded,
    TOGGLE_BOOKMARK: BookmarkToggled,
    CHANGE_BG_TYPE: BackgroundChanged,
    TOGGLE_CATEGORY: CategoryToggled,
    SELECT_ALL_CATEGORIES: AllCategoriesSelected,
    TOGGLE_FAVORITES: FavoritesToggled,
}


def parse_action(event: Mapping[str, Any]) -> Optional[Action]:
    """Build an action from its tagged dict form.

    Unknown tags return None so newer UI events pass through as no-ops.
    Known tags with a malformed payload raise pydantic's ValidationError.
    """
    action_type = event.get("type")
    if action_type == NEXT_QUOTE:
        payload = {key: value for key, value in event.items() if key != "type"}
        return NextQuoteSelected(snapshot=QuoteSnapshot.model_validate(payload))

    action_cls = _ACTIONS_BY_TYPE.get(action_type)
    if action_cls is None:
        return None
    return action_cls.model_validate(dict(event))
