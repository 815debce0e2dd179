"""Tests for vector similarity measures."""

import pytest

from wordspace.core.exceptions import UnsupportedMeasureError
from wordspace.core.results import Ok, Undefined, UnsupportedMeasure
from wordspace.core.types import SparseVector
from wordspace.similarity.measures import (
    SimilarityMeasure,
    cosine,
    dice,
    semantic_similarity,
)


class TestCosine:
    """Tests for cosine."""

    def test_parallel_vectors(self):
        """Should ignore magnitude."""
        result = cosine(SparseVector({"x": 3.0}), SparseVector({"x": 4.0}))

        assert isinstance(result, Ok)
        assert result.score == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine(SparseVector({"x": 1.0}), SparseVector({"y": 1.0})) == Ok(0.0)

    def test_zero_vector_is_undefined(self):
        result = cosine(SparseVector({"x": 1.0}), SparseVector())

        assert isinstance(result, Undefined)


class TestDice:
    """Tests for the Kolb/Dice measure."""

    def test_partial_overlap(self):
        result = dice(SparseVector({"x": 1.0, "y": 1.0}), SparseVector({"x": 1.0}))

        assert result.score == pytest.approx(2 / 3)

    def test_identical(self):
        v = SparseVector({"x": 2.0, "y": 5.0})

        assert dice(v, v).score == pytest.approx(1.0)

    def test_symmetric(self):
        a = SparseVector({"x": 1.0, "y": 3.0, "z": 0.5})
        b = SparseVector({"y": 2.0})

        assert dice(a, b) == dice(b, a)

    def test_empty_vectors_are_undefined(self):
        assert isinstance(dice(SparseVector(), SparseVector()), Undefined)

    def test_one_empty_vector_scores_zero(self):
        assert dice(SparseVector({"x": 1.0}), SparseVector()) == Ok(0.0)


class TestSemanticSimilarity:
    """Tests for measure dispatch."""

    def test_default_measure_is_kolb(self):
        a, b = SparseVector({"x": 1.0, "y": 1.0}), SparseVector({"x": 1.0})

        assert semantic_similarity(a, b) == dice(a, b)

    def test_by_name(self):
        a, b = SparseVector({"x": 3.0}), SparseVector({"x": 4.0})

        assert semantic_similarity(a, b, "COSINE").score == pytest.approx(1.0)
        assert semantic_similarity(a, b, "dice") == dice(a, b)

    def test_unknown_measure(self):
        """Should return UnsupportedMeasure instead of raising."""
        result = semantic_similarity(SparseVector(), SparseVector(), "euclid")

        assert result == UnsupportedMeasure("euclid")

    def test_from_name_raises(self):
        with pytest.raises(UnsupportedMeasureError):
            SimilarityMeasure.from_name("euclid")
