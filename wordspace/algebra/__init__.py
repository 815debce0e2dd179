"""Vector algebra - pure composition of sparse word vectors."""
from wordspace.algebra.operations import add, multiply, scale, dot, combine, dilate
from wordspace.algebra.factory import (
    CompositionMethodFactory,
    register_method,
    get_registered_methods,
)
from wordspace.algebra.methods import (
    CompositionMethod,
    Addition,
    Multiplication,
    Combined,
    Dilation,
    compose,
    compose_many,
)

__all__ = [
    "add",
    "multiply",
    "scale",
    "dot",
    "combine",
    "dilate",
    "CompositionMethodFactory",
    "register_method",
    "get_registered_methods",
    "CompositionMethod",
    "Addition",
    "Multiplication",
    "Combined",
    "Dilation",
    "compose",
    "compose_many",
]
