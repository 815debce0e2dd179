"""Composition of multi-word strings into single vectors."""
from wordspace.composition.pipeline import CompositionPipeline, tokenize

__all__ = ["CompositionPipeline", "tokenize"]
