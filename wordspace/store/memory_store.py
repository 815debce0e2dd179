"""In-memory word-space store."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from wordspace.core.types import WordRecord
from wordspace.store.base import BaseWordSpaceStore, validate_query
from wordspace.store.factory import register_store

logger = logging.getLogger(__name__)


@register_store("memory")
class InMemoryWordSpaceStore(BaseWordSpaceStore):
    """
    Word space held entirely in memory.

    Lookups return the first record added for a word. Iteration follows
    insertion order.

    Usage:
        store = InMemoryWordSpaceStore(records)
        record = store.lookup_exact("house")
    """

    def __init__(self, records: Iterable[WordRecord] = (), skipped: int = 0):
        """
        Args:
            records: Records to serve
            skipped: Corrupt entries already dropped by whoever built the records
        """
        self._records: List[WordRecord] = list(records)
        self._index: Dict[str, WordRecord] = {}
        for record in self._records:
            self._index.setdefault(record.word, record)
        self._skipped = skipped

        logger.debug(f"Initialized InMemoryWordSpaceStore: {len(self._records)} records")

    def lookup_exact(self, word: str) -> Optional[WordRecord]:
        self._ensure_open()
        return self._index.get(validate_query(word))

    def count(self) -> int:
        self._ensure_open()
        return len(self._records)

    def iterate_all(self) -> Iterator[WordRecord]:
        self._ensure_open()
        return iter(list(self._records))

    @property
    def skipped_entries(self) -> int:
        return self._skipped

    def health_check(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._records = []
        self._index = {}
        super().close()

    def __repr__(self) -> str:
        return f"InMemoryWordSpaceStore(records={len(self._records)})"
