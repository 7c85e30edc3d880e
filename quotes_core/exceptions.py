"""Error kinds raised by the quote store, selection engine and session."""

from typing import Any, Optional


class QuotesError(Exception):
    """Base class for every error raised by quotes_core."""


class SeedFailure(QuotesError):
    """The initial dataset could not be validated or written to the store."""


class QuoteNotFoundError(QuotesError):
    def __init__(self, quote_id: Optional[int], message: Optional[str] = None):
        self.quote_id = quote_id
        super().__init__(message or f"Quote {quote_id} not found")


class EmptySelectionError(QuotesError):
    """No quote matches the active filter; the user should pick a category."""

    def __init__(self, quote_filter: Any = None):
        self.quote_filter = quote_filter
        super().__init__("No quote matches the selected categories")
