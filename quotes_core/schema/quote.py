from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    INSPIRE = "inspire"
    MANAGEMENT = "management"
    SPORTS = "sports"
    LIFE = "life"
    FUNNY = "funny"
    LOVE = "love"
    ART = "art"
    STUDENTS = "students"


CATEGORY_NAMES = tuple(category.value for category in Category)

DEFAULT_AUTHOR = "Unknown"


class QuoteSeed(BaseModel):
    """One record of the initial dataset"""
    quote: str = Field(..., min_length=1, description="The quote text")
    author: Optional[str] = Field(None, description="Quote author")
    category: Category

    @field_validator("author")
    @classmethod
    def blank_author_is_unknown(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def resolved_author(self) -> str:
        return self.author or DEFAULT_AUTHOR


class QuoteSnapshot(BaseModel):
    """Immutable copy of a stored quote.

    Dumping with ``by_alias=True`` yields the ``NextQuoteSelected`` payload:
    ``{id, quote, author, category, displayedTimes, bookmarked}``.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    quote: str
    author: str
    category: str
    displayed_times: int = Field(..., ge=0)
    bookmarked: bool

    @classmethod
    def from_record(cls, record) -> "QuoteSnapshot":
        return cls(
            id=record.id,
            quote=record.quote,
            author=record.author,
            category=record.category,
            displayed_times=record.displayed_times,
            bookmarked=record.bookmarked,
        )


class QuoteFilter(BaseModel):
    """Eligibility predicate: category membership plus an optional bookmark check"""
    model_config = ConfigDict(frozen=True)

    categories: FrozenSet[str] = frozenset()
    favorites_only: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def matches(self, quote: QuoteSnapshot) -> bool:
        if quote.category not in self.categories:
            return False
        return quote.bookmarked or not self.favorites_only
