"""Abstract base class for word-space stores."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from wordspace.core.exceptions import QueryParseError, StoreUnavailableError
from wordspace.core.types import WordRecord

# Characters with a meaning in the lookup query syntax
RESERVED_QUERY_CHARS = frozenset('(){}[]^"~*?:\\/')
RESERVED_QUERY_PREFIXES = ("+", "-", "!")
RESERVED_QUERY_WORDS = frozenset({"AND", "OR", "NOT"})


def validate_query(word: str) -> str:
    """
    Check that a lookup token is a single plain word.

    Args:
        word: Token to look up

    Returns:
        The token unchanged

    Raises:
        QueryParseError: If the token is empty, contains whitespace or
            uses reserved query syntax
    """
    if not isinstance(word, str) or not word:
        raise QueryParseError("Empty query")
    if any(ch.isspace() for ch in word):
        raise QueryParseError(f"Query must be a single token: '{word}'")
    if word in RESERVED_QUERY_WORDS or word.startswith(RESERVED_QUERY_PREFIXES):
        raise QueryParseError(f"Query uses a reserved operator: '{word}'")
    bad = RESERVED_QUERY_CHARS.intersection(word)
    if bad:
        raise QueryParseError(f"Query contains reserved characters {sorted(bad)}: '{word}'")
    return word


class BaseWordSpaceStore(ABC):
    """
    Abstract base class that all word-space stores must implement.

    A store is read-only and opened once per session. Implementations
    must allow concurrent reads (lookups and a full scan at the same time).

    Ensures consistent interface across:
    - In-memory stores (tests, small word spaces)
    - JSON-lines word-space directories
    """

    _closed: bool = False
    # Whether the store is opened from a path on disk (see open_store)
    opens_path: bool = False

    @abstractmethod
    def lookup_exact(self, word: str) -> Optional[WordRecord]:
        """
        Exact, case-sensitive lookup on the word field.

        Args:
            word: A single token

        Returns:
            The record, or None if the word is not in the store

        Raises:
            QueryParseError: If the token uses reserved query syntax
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """
        Get total number of records in the store.

        Returns:
            Record count
        """
        pass

    @abstractmethod
    def iterate_all(self) -> Iterator[WordRecord]:
        """
        Lazily iterate over every readable record.

        Order is unspecified but stable for one store instance. Corrupt
        entries are skipped and reported through ``skipped_entries``.
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the store is readable.

        Returns:
            True if healthy
        """
        pass

    @property
    def skipped_entries(self) -> int:
        """Number of corrupt entries skipped while reading the store."""
        return 0

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release resources. The store cannot be used afterwards."""
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError(f"{self.__class__.__name__} has been closed")

    def __enter__(self) -> "BaseWordSpaceStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
