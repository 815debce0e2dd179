"""Word-level similarity and lookup queries against a word space."""
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from wordspace.codec.vector_codec import (
    FeatureMode,
    collocations,
    decode_neighbor_list,
    decode_word_vector,
    iter_collocation_entries,
    word_vector_entries,
)
from wordspace.composition.pipeline import CompositionPipeline, MethodSpec
from wordspace.core.exceptions import QueryParseError
from wordspace.core.results import Ok, SimilarityResult, Undefined, WordNotFound
from wordspace.core.types import (
    Collocation,
    CommonContextEntry,
    FeatureKey,
    Neighbor,
    SparseVector,
    WordRecord,
)
from wordspace.similarity.measures import SimilarityMeasure
from wordspace.store.base import BaseWordSpaceStore

logger = logging.getLogger(__name__)


def _overlap_ratio(
    first: Iterable[Tuple[FeatureKey, float]],
    second: Iterable[Tuple[FeatureKey, float]],
) -> Optional[float]:
    """
    Lin-style overlap of two weighted feature streams.

    The first stream is collected into a map while all of its weights are
    summed into the denominator. For every feature of the second stream its
    weight goes into the denominator, and if the feature also occurs in the
    first stream both weights go into the numerator.

    Returns:
        numerator / denominator, or None if the denominator is zero
    """
    seen: Dict[FeatureKey, float] = {}
    denominator = 0.0
    for key, value in first:
        seen[key] = value
        denominator += value

    numerator = 0.0
    for key, value in second:
        if key in seen:
            numerator += value + seen[key]
        denominator += value

    if denominator == 0:
        return None
    return numerator / denominator


def _collocation_features(record: WordRecord):
    for word, rel, value in iter_collocation_entries(record):
        yield (word, rel), value


def _neighbor_features(record: WordRecord):
    for neighbor in decode_neighbor_list(record):
        yield neighbor.word, neighbor.similarity


class SimilarityEngine:
    """
    Distributional similarity between words of a word space.

    Not-found words never raise: similarity queries return a WordNotFound
    result, frequency returns 0, list and vector queries return None.
    A corrupt record for a requested word raises MalformedRecordError.

    Usage:
        engine = SimilarityEngine(store)
        engine.first_order_similarity("house", "building")   # Ok(score=...)
        engine.common_context("house", "building")            # [...] or None
    """

    def __init__(
        self,
        store: BaseWordSpaceStore,
        composition: MethodSpec = None,
        feature_mode: Union[str, FeatureMode] = FeatureMode.AGGREGATED,
    ):
        """
        Args:
            store: Word space to query
            composition: Default composition method for phrase queries
            feature_mode: Keying of word vectors used for phrase queries
        """
        self.store = store
        self.pipeline = CompositionPipeline(store, method=composition, feature_mode=feature_mode)

    def _lookup(self, word: str) -> Optional[WordRecord]:
        """Look a word up, treating unparsable tokens as not found."""
        try:
            return self.store.lookup_exact(word)
        except QueryParseError as e:
            logger.warning(f"Query parse error for '{word}': {e}")
            return None

    def _lookup_pair(self, w1: str, w2: str):
        r1, r2 = self._lookup(w1), self._lookup(w2)
        missing = tuple(w for w, r in ((w1, r1), (w2, r2)) if r is None)
        return r1, r2, missing

    def number_of_words(self) -> int:
        """Number of words in the word space."""
        return self.store.count()

    def frequency(self, word: str) -> int:
        """Corpus frequency of a word; 0 if the word is not found."""
        record = self._lookup(word)
        if record is None:
            return 0
        return record.freq

    def similar_words(
        self,
        word: str,
        top_n: Optional[int] = None,
        min_similarity: Optional[float] = None,
    ) -> Optional[List[Neighbor]]:
        """
        Precomputed distributionally similar words, most similar first.

        Args:
            word: Input word
            top_n: Keep at most this many neighbours
            min_similarity: Stop at the first neighbour below this value

        Returns:
            Neighbours, or None if the word is not found
        """
        record = self._lookup(word)
        if record is None:
            return None

        neighbors = decode_neighbor_list(record)
        if min_similarity is not None:
            cut = len(neighbors)
            for i, neighbor in enumerate(neighbors):
                if neighbor.similarity < min_similarity:
                    cut = i
                    break
            neighbors = neighbors[:cut]
        if top_n is not None:
            neighbors = neighbors[:max(top_n, 0)]
        return neighbors

    def collocations(self, word: str, top_n: Optional[int] = None) -> Optional[List[Collocation]]:
        """
        Collocations summed over their positions, most significant first.

        Returns:
            Collocations with relation unset, or None if the word is not found
        """
        record = self._lookup(word)
        if record is None:
            return None
        result = collocations(record)
        if top_n is not None:
            result = result[:max(top_n, 0)]
        return result

    def word_vector(
        self,
        word: str,
        mode: Union[str, FeatureMode] = FeatureMode.POSITIONAL,
    ) -> Optional[SparseVector]:
        """The word's collocation vector, or None if the word is not found."""
        record = self._lookup(word)
        if record is None:
            return None
        return decode_word_vector(record, FeatureMode.from_name(mode))

    def first_order_similarity(self, w1: str, w2: str) -> SimilarityResult:
        """
        Similarity of two words based on their collocation sets.

        Features are (collocate, relation) pairs. The ratio is capped at 1.0
        to absorb accumulated rounding.

        Returns:
            Ok in [0, 1], WordNotFound, or Undefined if neither word has
            any collocation
        """
        r1, r2, missing = self._lookup_pair(w1, w2)
        if missing:
            return WordNotFound(missing)

        ratio = _overlap_ratio(_collocation_features(r1), _collocation_features(r2))
        if ratio is None:
            return Undefined("neither word has collocations")
        return Ok(min(ratio, 1.0))

    def second_order_similarity(self, w1: str, w2: str) -> SimilarityResult:
        """
        Similarity of two words based on their sets of similar words.

        Returns:
            Ok, WordNotFound, or Undefined if neither word has neighbours
        """
        r1, r2, missing = self._lookup_pair(w1, w2)
        if missing:
            return WordNotFound(missing)

        ratio = _overlap_ratio(_neighbor_features(r1), _neighbor_features(r2))
        if ratio is None:
            return Undefined("neither word has similar words")
        return Ok(ratio)

    def compositional_similarity(
        self,
        phrase1: str,
        phrase2: str,
        method: MethodSpec = None,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
    ) -> SimilarityResult:
        """
        Similarity of two multi-word strings by vector composition.

        Any token missing from the word space fails the whole call with
        WordNotFound naming the missing tokens.
        """
        return self.pipeline.similarity(phrase1, phrase2, method=method, measure=measure)

    def common_context(self, w1: str, w2: str) -> Optional[List[CommonContextEntry]]:
        """
        Features (collocate and position) shared by two words.

        Returns:
            None if either word is not found; an empty list if both exist
            but share no feature; otherwise entries sorted by
            value_w1 + value_w2, highest first
        """
        r1, r2, missing = self._lookup_pair(w1, w2)
        if missing:
            return None

        w1_values = {(c.word, c.relation): c.value for c in word_vector_entries(r1)}
        result = [
            CommonContextEntry(
                word=c.word,
                value_w1=w1_values[(c.word, c.relation)],
                value_w2=c.value,
                relation=c.relation,
            )
            for c in word_vector_entries(r2)
            if (c.word, c.relation) in w1_values
        ]
        result.sort(key=lambda entry: entry.combined, reverse=True)
        return result

    def health_check(self) -> bool:
        return self.store.health_check()
