"""Shared types used across modules."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from wordspace.core.exceptions import MalformedRecordError

# A bare word (neighbour / aggregated vectors) or (word, relation) for
# positional collocation vectors.
FeatureKey = Union[str, Tuple[str, int]]

RELATIONS = (1, 2, 3, 4, 5, 6)


@dataclass(frozen=True, eq=True)
class SparseVector(Mapping):
    """
    Immutable sparse vector keyed by feature.

    Attributes:
        weights: Feature -> weight. Copied on construction, so callers
            can never alias the internal dict.

    Iteration follows insertion order.
    """
    weights: Dict[FeatureKey, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "weights", dict(self.weights))

    def __getitem__(self, key: FeatureKey) -> float:
        return self.weights[key]

    def __iter__(self) -> Iterator[FeatureKey]:
        return iter(self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    __hash__ = None

    def total(self) -> float:
        """Sum of all weights."""
        return sum(self.weights.values())

    def norm_squared(self) -> float:
        """Sum of squared weights."""
        return sum(v * v for v in self.weights.values())

    def to_dict(self) -> Dict[FeatureKey, float]:
        """Return a mutable copy of the weights."""
        return dict(self.weights)

    def __repr__(self) -> str:
        return f"SparseVector(nnz={len(self.weights)})"


@dataclass(frozen=True)
class WordRecord:
    """
    One word-space entry, as handed out by a store.

    Field strings keep the store's compact encoding: space-separated
    tokens with a leading delimiter, parallel words/values strings.

    Attributes:
        word: The indexed word
        freq: Corpus frequency
        dsb: Distributionally similar words
        dsb_sim: Similarities for ``dsb`` with the leading "0." stripped
        kol: Collocation words for relations 1..6
        kol_sig: Significance values for relations 1..6
    """
    word: str
    freq: int
    dsb: str = ""
    dsb_sim: str = ""
    kol: Tuple[str, ...] = ("",) * 6
    kol_sig: Tuple[str, ...] = ("",) * 6

    def collocation_fields(self, relation: int) -> Tuple[str, str]:
        """Return the (words, significances) strings for one relation."""
        if relation not in RELATIONS:
            raise ValueError(f"Relation must be in 1..6, got {relation}")
        return self.kol[relation - 1], self.kol_sig[relation - 1]

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "WordRecord":
        """
        Build a record from a stored field dict.

        Uses the word-space field names: word, freq, dsb, dsbSim,
        kol1..kol6 and kol1Sig..kol6Sig. Missing collocation or neighbour
        fields are treated as empty.

        Raises:
            MalformedRecordError: If word or freq is missing or invalid
        """
        word = fields.get("word")
        if not isinstance(word, str) or not word:
            raise MalformedRecordError(f"Record has no usable 'word' field: {fields!r:.80}")
        try:
            freq = int(fields.get("freq"))
        except (TypeError, ValueError) as e:
            raise MalformedRecordError(f"Record '{word}' has invalid 'freq': {e}") from e

        def text(key: str) -> str:
            value = fields.get(key)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise MalformedRecordError(
                    f"Record '{word}' field '{key}' is not a string: {type(value).__name__}"
                )
            return value

        return cls(
            word=word,
            freq=freq,
            dsb=text("dsb"),
            dsb_sim=text("dsbSim"),
            kol=tuple(text(f"kol{rel}") for rel in RELATIONS),
            kol_sig=tuple(text(f"kol{rel}Sig") for rel in RELATIONS),
        )

    def to_fields(self) -> Dict[str, Any]:
        """Inverse of from_fields."""
        fields: Dict[str, Any] = {
            "word": self.word,
            "freq": self.freq,
            "dsb": self.dsb,
            "dsbSim": self.dsb_sim,
        }
        for rel in RELATIONS:
            fields[f"kol{rel}"] = self.kol[rel - 1]
            fields[f"kol{rel}Sig"] = self.kol_sig[rel - 1]
        return fields


@dataclass(frozen=True)
class Collocation:
    """A collocate with its significance; relation is None when aggregated."""
    word: str
    value: float
    relation: Optional[int] = None


@dataclass(frozen=True)
class Neighbor:
    """A distributionally similar word."""
    word: str
    similarity: float


@dataclass(frozen=True)
class CommonContextEntry:
    """
    A (word, relation) feature shared by two words.

    Attributes:
        word: Context word
        value_w1: Significance with the first input word
        value_w2: Significance with the second input word
        relation: Relative position shared by both
    """
    word: str
    value_w1: float
    value_w2: float
    relation: int

    @property
    def combined(self) -> float:
        return self.value_w1 + self.value_w2


@dataclass(frozen=True)
class ScoredWord:
    """A word with a similarity score (higher is better)."""
    word: str
    score: float

    def __repr__(self) -> str:
        return f"ScoredWord(word='{self.word}', score={self.score:.4f})"


@dataclass
class ScanResult:
    """
    Result of a full-corpus scan.

    Attributes:
        words: Words with strictly positive score, best first
        scanned: Records that were decoded and scored
        skipped: Corrupt entries skipped by the store or the decoder
    """
    words: List[ScoredWord]
    scanned: int = 0
    skipped: int = 0

    def top(self, n: int) -> List[ScoredWord]:
        return self.words[:n]
