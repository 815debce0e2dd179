"""Vector composition methods."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from wordspace.algebra import operations
from wordspace.algebra.factory import register_method
from wordspace.core.exceptions import InsufficientOperandsError
from wordspace.core.types import SparseVector


class CompositionMethod(ABC):
    """
    Abstract base class for composing two word vectors into one.

    The set of methods is closed: Addition, Multiplication, Combined and
    Dilation.
    """

    name: str = ""

    @abstractmethod
    def apply(self, a: SparseVector, b: SparseVector) -> SparseVector:
        """
        Compose two vectors.

        Args:
            a: Left operand (the accumulated vector when folding)
            b: Right operand

        Returns:
            A new vector; operands are left untouched
        """
        pass

    @property
    def is_symmetric(self) -> bool:
        return True


@register_method("addition")
@dataclass(frozen=True)
class Addition(CompositionMethod):
    """Simple vector addition."""
    name = "addition"

    def apply(self, a: SparseVector, b: SparseVector) -> SparseVector:
        return operations.add(a, b)


@register_method("multiplication")
@dataclass(frozen=True)
class Multiplication(CompositionMethod):
    """Entry-wise multiplication."""
    name = "multiplication"

    def apply(self, a: SparseVector, b: SparseVector) -> SparseVector:
        return operations.multiply(a, b)


@register_method("combined")
@dataclass(frozen=True)
class Combined(CompositionMethod):
    """
    alpha*a + beta*b + gamma*(a*b).

    Leave any weight as None to use the defaults for all three.
    """
    alpha: Optional[float] = None
    beta: Optional[float] = None
    gamma: Optional[float] = None

    name = "combined"

    def apply(self, a: SparseVector, b: SparseVector) -> SparseVector:
        return operations.combine(a, b, self.alpha, self.beta, self.gamma)


@register_method("dilation")
@dataclass(frozen=True)
class Dilation(CompositionMethod):
    """Dilate b along the direction of a; operand order matters."""
    lambda_: Optional[float] = None

    name = "dilation"

    def apply(self, a: SparseVector, b: SparseVector) -> SparseVector:
        return operations.dilate(a, b, self.lambda_)

    @property
    def is_symmetric(self) -> bool:
        return False


def compose(a: SparseVector, b: SparseVector, method: CompositionMethod) -> SparseVector:
    """Compose two vectors with the given method."""
    return method.apply(a, b)


def compose_many(vectors: Sequence[SparseVector], method: CompositionMethod) -> SparseVector:
    """
    Fold a list of vectors left to right.

        result = f(v0, v1); result = f(result, v2); ...

    Raises:
        InsufficientOperandsError: If fewer than two vectors are given
    """
    if len(vectors) < 2:
        raise InsufficientOperandsError(
            f"Composition needs at least two vectors, got {len(vectors)}"
        )

    result = method.apply(vectors[0], vectors[1])
    for vector in vectors[2:]:
        result = method.apply(result, vector)
    return result
