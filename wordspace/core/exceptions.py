"""Custom exceptions for word-space queries."""
from typing import Iterable


class WordSpaceError(Exception):
    """Base class for all word-space errors."""
    pass


class WordNotFoundError(WordSpaceError):
    """Raised when one or more words are absent from the word space."""

    def __init__(self, words: Iterable[str]):
        self.words = tuple(words)
        super().__init__(f"Word(s) not found in word space: {', '.join(self.words)}")


class MalformedRecordError(WordSpaceError):
    """Raised when a record's fields are inconsistent or cannot be parsed."""
    pass


class InsufficientOperandsError(WordSpaceError):
    """Raised when composition is requested with fewer than two vectors."""
    pass


class StoreUnavailableError(WordSpaceError):
    """Raised when a word space cannot be opened or has been closed."""
    pass


class QueryParseError(WordSpaceError):
    """Raised when a lookup token contains reserved query syntax."""
    pass


class UnsupportedMeasureError(WordSpaceError):
    """Raised when a similarity measure or composition method is unknown."""
    pass
