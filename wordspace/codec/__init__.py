"""Decoding of word-space records into sparse vectors."""
from wordspace.codec.vector_codec import (
    iter_collocation_entries,
    decode_collocation_vector,
    decode_collocation_vector_aggregated,
    decode_neighbor_list,
    decode_neighbor_vector,
    decode_frequency,
    collocations,
    word_vector_entries,
    FeatureMode,
    decode_word_vector,
)

__all__ = [
    "iter_collocation_entries",
    "decode_collocation_vector",
    "decode_collocation_vector_aggregated",
    "decode_neighbor_list",
    "decode_neighbor_vector",
    "decode_frequency",
    "collocations",
    "word_vector_entries",
    "FeatureMode",
    "decode_word_vector",
]
