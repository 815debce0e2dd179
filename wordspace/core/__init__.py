"""Core types, results, errors and configuration."""
from wordspace.core.exceptions import (
    WordSpaceError,
    WordNotFoundError,
    MalformedRecordError,
    InsufficientOperandsError,
    StoreUnavailableError,
    QueryParseError,
    UnsupportedMeasureError,
)
from wordspace.core.results import (
    Ok,
    WordNotFound,
    Undefined,
    UnsupportedMeasure,
    SimilarityResult,
)
from wordspace.core.types import (
    FeatureKey,
    SparseVector,
    WordRecord,
    Collocation,
    Neighbor,
    CommonContextEntry,
    ScoredWord,
    ScanResult,
)

__all__ = [
    "WordSpaceError",
    "WordNotFoundError",
    "MalformedRecordError",
    "InsufficientOperandsError",
    "StoreUnavailableError",
    "QueryParseError",
    "UnsupportedMeasureError",
    "Ok",
    "WordNotFound",
    "Undefined",
    "UnsupportedMeasure",
    "SimilarityResult",
    "FeatureKey",
    "SparseVector",
    "WordRecord",
    "Collocation",
    "Neighbor",
    "CommonContextEntry",
    "ScoredWord",
    "ScanResult",
]
