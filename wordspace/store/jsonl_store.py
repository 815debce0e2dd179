"""Word-space store backed by a JSON-lines file."""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from wordspace.core.exceptions import MalformedRecordError, StoreUnavailableError
from wordspace.core.types import WordRecord
from wordspace.store.base import BaseWordSpaceStore, validate_query
from wordspace.store.factory import register_store

logger = logging.getLogger(__name__)

WORDSPACE_FILENAME = "wordspace.jsonl"


def _parse_line(line: bytes) -> WordRecord:
    """Parse one stored line into a record."""
    try:
        fields = json.loads(line)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRecordError(f"Invalid JSON: {e}") from e
    if not isinstance(fields, dict):
        raise MalformedRecordError("Entry is not a JSON object")
    return WordRecord.from_fields(fields)


@register_store("jsonl")
class JsonlWordSpaceStore(BaseWordSpaceStore):
    """
    Read-only word space stored as one JSON object per line.

    Each line carries the fields word, freq, dsb, dsbSim, kol1..kol6 and
    kol1Sig..kol6Sig.

    Two modes:
    - load_into_memory=False: a word -> byte offset index is built on open
      and records are parsed on demand. Small footprint.
    - load_into_memory=True: every record is parsed up front. Faster
      lookups and scans, but the whole word space must fit in RAM.

    Unreadable lines are skipped and counted in ``skipped_entries``.

    Usage:
        with JsonlWordSpaceStore("data/wordspace", load_into_memory=True) as store:
            record = store.lookup_exact("house")
    """

    opens_path = True

    def __init__(self, path: str, load_into_memory: bool = False):
        """
        Args:
            path: Word-space directory (containing wordspace.jsonl) or the
                .jsonl file itself
            load_into_memory: Parse the whole word space into RAM

        Raises:
            StoreUnavailableError: If path is not a readable word space
        """
        self.path = self._resolve_path(path)
        self.load_into_memory = load_into_memory

        self._lock = threading.Lock()
        self._offsets: List[int] = []
        self._index: Dict[str, int] = {}
        self._records: List[WordRecord] = []
        self._by_word: Dict[str, WordRecord] = {}
        self._skipped = 0
        self._file = None

        try:
            self._open()
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read word space {self.path}: {e}") from e

        if self._skipped:
            logger.warning(f"Word space {self.path} has {self._skipped} defect entries")
        logger.info(
            f"Opened word space {self.path}: {self.count()} words, "
            f"in_memory={load_into_memory}"
        )

    @staticmethod
    def _resolve_path(path: str) -> Path:
        candidate = Path(path)
        if candidate.is_dir():
            candidate = candidate / WORDSPACE_FILENAME
        if not candidate.is_file():
            raise StoreUnavailableError(f"Not a word space: {path}")
        return candidate

    def _open(self) -> None:
        with open(self.path, "rb") as f:
            offset = 0
            for line in f:
                start = offset
                offset += len(line)
                if not line.strip():
                    continue
                try:
                    record = _parse_line(line)
                except MalformedRecordError as e:
                    self._skipped += 1
                    logger.debug(f"Skipping entry at byte {start}: {e}")
                    continue

                if self.load_into_memory:
                    self._records.append(record)
                    self._by_word.setdefault(record.word, record)
                else:
                    self._offsets.append(start)
                    self._index.setdefault(record.word, start)

        if not self.load_into_memory:
            self._file = open(self.path, "rb")

    def _read_at(self, offset: int) -> WordRecord:
        with self._lock:
            self._file.seek(offset)
            line = self._file.readline()
        return _parse_line(line)

    def lookup_exact(self, word: str) -> Optional[WordRecord]:
        self._ensure_open()
        word = validate_query(word)

        if self.load_into_memory:
            return self._by_word.get(word)

        offset = self._index.get(word)
        if offset is None:
            return None
        return self._read_at(offset)

    def count(self) -> int:
        self._ensure_open()
        if self.load_into_memory:
            return len(self._records)
        return len(self._offsets)

    def iterate_all(self) -> Iterator[WordRecord]:
        self._ensure_open()
        if self.load_into_memory:
            yield from list(self._records)
            return

        # Separate handle so a running scan does not contend with lookups
        with open(self.path, "rb") as f:
            for offset in self._offsets:
                f.seek(offset)
                yield _parse_line(f.readline())

    @property
    def skipped_entries(self) -> int:
        return self._skipped

    def health_check(self) -> bool:
        if self._closed:
            return False
        return self.path.is_file()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        self._records = []
        self._by_word = {}
        self._offsets = []
        self._index = {}
        super().close()
        logger.info(f"Closed word space {self.path}")

    def __repr__(self) -> str:
        return f"JsonlWordSpaceStore(path='{self.path}', in_memory={self.load_into_memory})"
