"""
Pure operations on sparse vectors.

None of these functions mutate their operands; each returns a new
SparseVector (or a scalar).
"""
from typing import Dict, Optional

from wordspace.core.types import FeatureKey, SparseVector

# Mitchell & Lapata (2008), tuned for verb-noun composition
DEFAULT_ALPHA = 0.95
DEFAULT_BETA = 0.0
DEFAULT_GAMMA = 0.05
DEFAULT_LAMBDA = 2.0


def add(a: SparseVector, b: SparseVector) -> SparseVector:
    """Key-wise sum over the union of features."""
    weights: Dict[FeatureKey, float] = {k: v for k, v in a.items() if k not in b}
    for k, v in b.items():
        weights[k] = a[k] + v if k in a else v
    return SparseVector(weights)


def multiply(a: SparseVector, b: SparseVector) -> SparseVector:
    """Key-wise product over the intersection of features."""
    return SparseVector({k: v * b[k] for k, v in a.items() if k in b})


def scale(v: SparseVector, factor: float) -> SparseVector:
    """
    Multiply every weight by a scalar.

    Scaling by zero yields the empty vector rather than a vector of
    explicit zeros.
    """
    if factor == 0:
        return SparseVector()
    return SparseVector({k: w * factor for k, w in v.items()})


def dot(a: SparseVector, b: SparseVector) -> float:
    """Scalar product over shared features."""
    if len(b) < len(a):
        a, b = b, a
    return sum(v * b[k] for k, v in a.items() if k in b)


def combine(
    a: SparseVector,
    b: SparseVector,
    alpha: Optional[float] = None,
    beta: Optional[float] = None,
    gamma: Optional[float] = None,
) -> SparseVector:
    """
    Weighted mix of addition and multiplication:

        p = alpha*a + beta*b + gamma*(a * b)

    See equation (11) in Mitchell & Lapata, "Vector-based Models of
    Semantic Composition", ACL-08. If any of alpha, beta, gamma is None,
    all three fall back to the defaults (0.95, 0.0, 0.05).
    """
    if alpha is None or beta is None or gamma is None:
        alpha, beta, gamma = DEFAULT_ALPHA, DEFAULT_BETA, DEFAULT_GAMMA

    product = scale(multiply(a, b), gamma)
    return add(add(scale(a, alpha), scale(b, beta)), product)


def dilate(u: SparseVector, v: SparseVector, lambda_: Optional[float] = None) -> SparseVector:
    """
    Stretch v along the direction of u:

        (u.u)v + (lambda-1)(u.v)u

    where . is the dot product. lambda defaults to 2.0. Not symmetric:
    dilate(u, v) != dilate(v, u) in general. See chapter 4 of J. Mitchell,
    "Composition in Distributional Models of Semantics", 2011.
    """
    if lambda_ is None:
        lambda_ = DEFAULT_LAMBDA

    uu = dot(u, u)
    uv = dot(u, v)
    return add(scale(v, uu), scale(u, (lambda_ - 1) * uv))
