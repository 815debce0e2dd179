"""Similarity measures. The word-level engine lives in wordspace.similarity.engine."""
from wordspace.similarity.measures import (
    SimilarityMeasure,
    cosine,
    dice,
    semantic_similarity,
)

__all__ = [
    "SimilarityMeasure",
    "cosine",
    "dice",
    "semantic_similarity",
]
