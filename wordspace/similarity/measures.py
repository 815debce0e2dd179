"""Vector similarity measures."""
import math
from enum import Enum
from typing import Union

from wordspace.algebra.operations import dot
from wordspace.core.exceptions import UnsupportedMeasureError
from wordspace.core.results import Ok, SimilarityResult, Undefined, UnsupportedMeasure
from wordspace.core.types import SparseVector


class SimilarityMeasure(Enum):
    """Available measures for vector comparison."""
    COSINE = "cosine"
    # Kolb (2009), "Experiments on the difference between semantic
    # similarity and relatedness", NODALIDA. The default measure.
    KOLB = "kolb"

    @classmethod
    def from_name(cls, name: Union[str, "SimilarityMeasure"]) -> "SimilarityMeasure":
        """
        Resolve a measure from its name ('cosine', 'kolb' or 'dice').

        Raises:
            UnsupportedMeasureError: If the name is unknown
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        if key == "dice":
            return cls.KOLB
        for measure in cls:
            if measure.value == key:
                return measure
        raise UnsupportedMeasureError(
            f"Unknown similarity measure: '{name}'. Available: {[m.value for m in cls]}"
        )


def cosine(a: SparseVector, b: SparseVector) -> SimilarityResult:
    """
    Cosine of the angle between a and b.

    Returns:
        Ok in [-1, 1] ([0, 1] for nonnegative weights), or Undefined if
        either vector has zero norm
    """
    norm_product = a.norm_squared() * b.norm_squared()
    if norm_product == 0:
        return Undefined("cosine is undefined for a zero vector")
    return Ok(dot(a, b) / math.sqrt(norm_product))


def dice(a: SparseVector, b: SparseVector) -> SimilarityResult:
    """
    Dice-style overlap used as the word space's default measure.

    numerator = sum over shared keys of a[k] + b[k]
    denominator = sum(a) + sum(b)

    Shared weights appear in the denominator once through each vector's
    own total.

    Returns:
        Ok in [0, 1] for nonnegative weights, or Undefined if both
        vectors sum to zero
    """
    if len(b) < len(a):
        small, large = b, a
    else:
        small, large = a, b
    numerator = sum(v + large[k] for k, v in small.items() if k in large)
    denominator = a.total() + b.total()
    if denominator == 0:
        return Undefined("dice is undefined for vectors summing to zero")
    return Ok(numerator / denominator)


_MEASURES = {
    SimilarityMeasure.COSINE: cosine,
    SimilarityMeasure.KOLB: dice,
}


def semantic_similarity(
    a: SparseVector,
    b: SparseVector,
    measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
) -> SimilarityResult:
    """
    Compare two vectors with the given measure.

    Returns:
        The measure's result, or UnsupportedMeasure for an unknown measure
    """
    try:
        resolved = SimilarityMeasure.from_name(measure)
    except UnsupportedMeasureError:
        return UnsupportedMeasure(str(measure))
    return _MEASURES[resolved](a, b)
