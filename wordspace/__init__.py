"""Distributional-semantics queries over a precomputed word space."""

__version__ = "1.4.0"

from wordspace.core.results import Ok, WordNotFound, Undefined, UnsupportedMeasure
from wordspace.core.types import SparseVector, WordRecord
from wordspace.store import open_store, InMemoryWordSpaceStore, JsonlWordSpaceStore
from wordspace.algebra import Addition, Multiplication, Combined, Dilation
from wordspace.similarity import SimilarityMeasure
from wordspace.similarity.engine import SimilarityEngine
from wordspace.composition import CompositionPipeline
from wordspace.scan import CorpusScan

__all__ = [
    "__version__",
    "Ok",
    "WordNotFound",
    "Undefined",
    "UnsupportedMeasure",
    "SparseVector",
    "WordRecord",
    "open_store",
    "InMemoryWordSpaceStore",
    "JsonlWordSpaceStore",
    "Addition",
    "Multiplication",
    "Combined",
    "Dilation",
    "SimilarityMeasure",
    "SimilarityEngine",
    "CompositionPipeline",
    "CorpusScan",
]
