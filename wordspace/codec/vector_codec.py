"""
Decoding of the word space's compact field encoding.

Every words/values field pair is a space-separated string with a leading
delimiter, e.g. words=" cat dog", values=" 2.0 1.5". Splitting on the
delimiter yields an empty token at index 0, which is an artifact and is
skipped. Neighbour similarities are stored without their leading "0."
("500" means 0.500); collocation significances are plain floats.
"""
from enum import Enum
from typing import Callable, Dict, Iterator, List, Tuple, Union

from wordspace.core.exceptions import MalformedRecordError
from wordspace.core.types import (
    RELATIONS,
    Collocation,
    FeatureKey,
    Neighbor,
    SparseVector,
    WordRecord,
)

DELIMITER = " "
NEIGHBOR_VALUE_PREFIX = "0."


def _plain_float(token: str) -> float:
    return float(token)


def _stripped_similarity(token: str) -> float:
    return float(NEIGHBOR_VALUE_PREFIX + token)


def _iter_pairs(
    words_field: str,
    values_field: str,
    parse: Callable[[str], float],
    record: WordRecord,
    field_name: str,
) -> Iterator[Tuple[str, float]]:
    """
    Yield (word, value) pairs of one parallel field, skipping index 0.

    Trailing delimiters are dropped before splitting, so " a b " reads as " a b".
    """
    words = words_field.rstrip(DELIMITER).split(DELIMITER)
    values = values_field.rstrip(DELIMITER).split(DELIMITER)
    if len(words) != len(values):
        raise MalformedRecordError(
            f"Record '{record.word}': field '{field_name}' has {len(words)} words "
            f"but {len(values)} values"
        )

    for i in range(1, len(words)):
        try:
            value = parse(values[i])
        except ValueError as e:
            raise MalformedRecordError(
                f"Record '{record.word}': bad value '{values[i]}' in '{field_name}'"
            ) from e
        yield words[i], value


def iter_collocation_entries(record: WordRecord) -> Iterator[Tuple[str, int, float]]:
    """Yield every (word, relation, significance) in store order."""
    for rel in RELATIONS:
        words_field, values_field = record.collocation_fields(rel)
        for word, value in _iter_pairs(
            words_field, values_field, _plain_float, record, f"kol{rel}"
        ):
            yield word, rel, value


def decode_collocation_vector(record: WordRecord) -> SparseVector:
    """
    Decode the positional collocation vector of a record.

    Returns:
        SparseVector keyed by (word, relation)

    Raises:
        MalformedRecordError: If parallel fields disagree or values don't parse
    """
    weights: Dict[FeatureKey, float] = {}
    for word, rel, value in iter_collocation_entries(record):
        weights[(word, rel)] = value
    return SparseVector(weights)


def decode_collocation_vector_aggregated(record: WordRecord) -> SparseVector:
    """
    Decode the collocation vector with relations collapsed.

    Significances of the same word at different positions are summed.

    Returns:
        SparseVector keyed by word
    """
    weights: Dict[FeatureKey, float] = {}
    for word, _rel, value in iter_collocation_entries(record):
        weights[word] = weights.get(word, 0.0) + value
    return SparseVector(weights)


def decode_neighbor_list(record: WordRecord) -> List[Neighbor]:
    """
    Decode the distributionally similar words of a record.

    The order of the store (most similar first) is preserved.
    """
    return [
        Neighbor(word=word, similarity=sim)
        for word, sim in _iter_pairs(
            record.dsb, record.dsb_sim, _stripped_similarity, record, "dsb"
        )
    ]


def decode_neighbor_vector(record: WordRecord) -> SparseVector:
    """Neighbour list as a word-keyed vector."""
    weights: Dict[FeatureKey, float] = {}
    for neighbor in decode_neighbor_list(record):
        weights[neighbor.word] = neighbor.similarity
    return SparseVector(weights)


def decode_frequency(record: WordRecord) -> int:
    return record.freq


def collocations(record: WordRecord) -> List[Collocation]:
    """Collocations summed over positions, highest significance first."""
    vector = decode_collocation_vector_aggregated(record)
    result = [Collocation(word=word, value=value) for word, value in vector.items()]
    result.sort(key=lambda c: c.value, reverse=True)
    return result


def word_vector_entries(record: WordRecord) -> List[Collocation]:
    """Collocations with their exact positions, highest significance first."""
    result = [
        Collocation(word=word, value=value, relation=rel)
        for word, rel, value in iter_collocation_entries(record)
    ]
    result.sort(key=lambda c: c.value, reverse=True)
    return result


class FeatureMode(Enum):
    """How collocations are keyed when a record becomes a word vector."""
    AGGREGATED = "aggregated"   # word, summed over positions
    POSITIONAL = "positional"   # (word, relation)

    @classmethod
    def from_name(cls, name: Union[str, "FeatureMode"]) -> "FeatureMode":
        if isinstance(name, cls):
            return name
        return cls(str(name).strip().lower())


def decode_word_vector(
    record: WordRecord,
    mode: FeatureMode = FeatureMode.AGGREGATED,
) -> SparseVector:
    """Decode the collocation vector used for composition and scanning."""
    if mode is FeatureMode.POSITIONAL:
        return decode_collocation_vector(record)
    return decode_collocation_vector_aggregated(record)
