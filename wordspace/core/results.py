"""
Tagged similarity results.

Every similarity query returns one of Ok, WordNotFound, UnsupportedMeasure
or Undefined. ``float(result)`` maps a variant onto the numeric codes used
by the command line output:

    Ok                  -> the score
    WordNotFound        -> -1.0
    Undefined           -> -2.0
    UnsupportedMeasure  -> -3.0
"""
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Ok:
    """A successfully computed similarity."""
    score: float

    status = "ok"
    ok = True

    def __float__(self) -> float:
        return float(self.score)


@dataclass(frozen=True)
class WordNotFound:
    """One or more input words (or phrase tokens) are not in the word space."""
    words: Tuple[str, ...]

    status = "word_not_found"
    ok = False

    def __float__(self) -> float:
        return -1.0


@dataclass(frozen=True)
class Undefined:
    """The measure has no value for the inputs (e.g. cosine of an empty vector)."""
    reason: str

    status = "undefined"
    ok = False

    def __float__(self) -> float:
        return -2.0


@dataclass(frozen=True)
class UnsupportedMeasure:
    """The requested similarity measure is unknown."""
    measure: str

    status = "unsupported_measure"
    ok = False

    def __float__(self) -> float:
        return -3.0


SimilarityResult = Union[Ok, WordNotFound, Undefined, UnsupportedMeasure]
