"""Tests for vector operations and composition methods."""

import pytest

from wordspace.algebra.factory import CompositionMethodFactory, get_registered_methods
from wordspace.algebra.methods import (
    Addition,
    Combined,
    Dilation,
    Multiplication,
    compose,
    compose_many,
)
from wordspace.algebra.operations import add, combine, dilate, dot, multiply, scale
from wordspace.core.exceptions import InsufficientOperandsError, UnsupportedMeasureError
from wordspace.core.types import SparseVector


def vec(**weights):
    return SparseVector(weights)


class TestOperations:
    """Tests for pure vector operations."""

    def test_add_union(self):
        result = add(vec(x=1.0, y=2.0), vec(y=3.0, z=4.0))

        assert dict(result) == {"x": 1.0, "y": 5.0, "z": 4.0}

    def test_multiply_intersection(self):
        """Should keep only shared keys."""
        result = multiply(vec(x=2.0, y=2.0), vec(y=3.0, z=4.0))

        assert dict(result) == {"y": 6.0}

    def test_operands_untouched(self):
        a, b = vec(x=1.0), vec(x=2.0)

        add(a, b)
        multiply(a, b)
        combine(a, b)
        dilate(a, b)

        assert dict(a) == {"x": 1.0}
        assert dict(b) == {"x": 2.0}

    def test_add_and_multiply_commute(self):
        a, b = vec(x=1.0, y=2.0), vec(y=3.0, z=4.0)

        assert add(a, b) == add(b, a)
        assert multiply(a, b) == multiply(b, a)
        assert set(add(a, b)) == {"x", "y", "z"}
        assert set(multiply(a, b)) == {"y"}

    def test_scale_by_zero_is_empty(self):
        assert len(scale(vec(x=1.0), 0)) == 0

    def test_dot(self):
        assert dot(vec(x=2.0, y=1.0), vec(x=3.0, z=5.0)) == 6.0

    def test_combine_identity(self):
        """Should return a unchanged with weights (1, 0, 0)."""
        a, b = vec(x=1.0, y=2.0), vec(y=3.0, z=4.0)

        assert combine(a, b, 1.0, 0.0, 0.0) == a

    def test_combine_defaults(self):
        """Should use 0.95, 0.0, 0.05 when weights are left out."""
        result = combine(vec(x=2.0), vec(x=3.0))

        assert result["x"] == pytest.approx(0.95 * 2.0 + 0.05 * 6.0)

    def test_combine_partial_weights_fall_back(self):
        """Should use defaults for all three if any weight is missing."""
        assert combine(vec(x=2.0), vec(x=3.0), alpha=0.1) == combine(vec(x=2.0), vec(x=3.0))

    def test_dilate(self):
        """Should compute (u.u)v + (lambda-1)(u.v)u."""
        result = dilate(vec(x=2.0), vec(x=1.0, y=1.0), 2.0)

        assert dict(result) == {"x": 8.0, "y": 4.0}

    def test_dilate_is_asymmetric(self):
        u, v = vec(x=1.0), vec(y=1.0)

        assert dilate(u, v) == vec(y=1.0)
        assert dilate(v, u) == vec(x=1.0)
        assert dilate(u, v) != dilate(v, u)


class TestCompositionMethods:
    """Tests for the closed set of composition methods."""

    def test_methods_match_operations(self):
        a, b = vec(x=1.0, y=2.0), vec(y=3.0)

        assert compose(a, b, Addition()) == add(a, b)
        assert compose(a, b, Multiplication()) == multiply(a, b)
        assert compose(a, b, Combined(0.6, 0.4, 0.0)) == combine(a, b, 0.6, 0.4, 0.0)
        assert compose(a, b, Dilation(3.0)) == dilate(a, b, 3.0)

    def test_symmetry_flags(self):
        assert Addition().is_symmetric
        assert not Dilation().is_symmetric

    def test_compose_many_folds_left(self):
        """Should compute f(f(v0, v1), v2)."""
        vectors = [vec(x=1.0), vec(y=1.0), vec(z=2.0)]
        method = Dilation()

        expected = dilate(dilate(vectors[0], vectors[1]), vectors[2])

        assert compose_many(vectors, method) == expected

    def test_compose_many_needs_two(self):
        with pytest.raises(InsufficientOperandsError):
            compose_many([vec(x=1.0)], Addition())

        with pytest.raises(InsufficientOperandsError):
            compose_many([], Addition())


class TestCompositionMethodFactory:
    """Tests for CompositionMethodFactory."""

    def test_registered_methods(self):
        methods = get_registered_methods()

        assert {"addition", "multiplication", "combined", "dilation"} <= set(methods)

    def test_create(self):
        method = CompositionMethodFactory.create("Dilation", **{"lambda": 3.0})

        assert method == Dilation(lambda_=3.0)

    def test_create_unknown(self):
        with pytest.raises(UnsupportedMeasureError) as exc_info:
            CompositionMethodFactory.create("tensor")

        assert "Unknown composition method" in str(exc_info.value)

    def test_from_config_ignores_foreign_params(self):
        """Should only pass the parameters the method takes."""
        method = CompositionMethodFactory.from_config({
            "method": "combined",
            "alpha": 0.6,
            "beta": 0.4,
            "gamma": 0.0,
            "lambda": 5.0,
        })

        assert method == Combined(alpha=0.6, beta=0.4, gamma=0.0)

    def test_from_config_defaults(self):
        assert CompositionMethodFactory.from_config(None) == Combined()
        assert CompositionMethodFactory.from_config("addition") == Addition()

    def test_from_config_passes_instances_through(self):
        method = Dilation(4.0)

        assert CompositionMethodFactory.from_config(method) is method
