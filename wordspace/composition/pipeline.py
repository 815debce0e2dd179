"""Compositional similarity of multi-word terms, phrases and sentences."""
import logging
from typing import List, Optional, Union

from wordspace.algebra.factory import CompositionMethodFactory
from wordspace.algebra.methods import CompositionMethod, compose_many
from wordspace.codec.vector_codec import FeatureMode, decode_word_vector
from wordspace.core.exceptions import (
    InsufficientOperandsError,
    QueryParseError,
    UnsupportedMeasureError,
    WordNotFoundError,
)
from wordspace.core.results import SimilarityResult, UnsupportedMeasure, WordNotFound
from wordspace.core.types import SparseVector
from wordspace.similarity.measures import SimilarityMeasure, semantic_similarity
from wordspace.store.base import BaseWordSpaceStore

logger = logging.getLogger(__name__)

MethodSpec = Union[CompositionMethod, str, dict, None]


def tokenize(phrase: str) -> List[str]:
    """Trim and split on runs of whitespace."""
    return phrase.split()


class CompositionPipeline:
    """
    Builds a single vector for a multi-word string and compares such vectors.

    Each token's collocation vector is fetched from the store and the
    vectors are folded left to right with a composition method. A single
    token is used as is.

    Usage:
        pipeline = CompositionPipeline(store, method=Combined())
        vector = pipeline.compose_phrase("red wine")
        result = pipeline.similarity("red wine", "white wine",
                                     measure=SimilarityMeasure.COSINE)
    """

    def __init__(
        self,
        store: BaseWordSpaceStore,
        method: MethodSpec = None,
        feature_mode: Union[str, FeatureMode] = FeatureMode.AGGREGATED,
    ):
        """
        Args:
            store: Word space to read from
            method: Default composition method (instance, name or config dict);
                None means Combined with default weights
            feature_mode: Key collocations by word (aggregated) or by
                (word, relation) (positional)
        """
        self.store = store
        self.method = CompositionMethodFactory.from_config(method)
        self.feature_mode = FeatureMode.from_name(feature_mode)

        logger.debug(
            f"Initialized CompositionPipeline: method={self.method}, "
            f"feature_mode={self.feature_mode.value}"
        )

    def word_vector(self, token: str) -> SparseVector:
        """
        Fetch the collocation vector of a single token.

        Raises:
            WordNotFoundError: If the token is not in the word space
            MalformedRecordError: If the stored record is corrupt
        """
        try:
            record = self.store.lookup_exact(token)
        except QueryParseError as e:
            logger.warning(f"Treating unparsable token as not found: {e}")
            record = None
        if record is None:
            raise WordNotFoundError([token])
        return decode_word_vector(record, self.feature_mode)

    def compose_phrase(self, phrase: str, method: MethodSpec = None) -> SparseVector:
        """
        Compose the vectors of all tokens in a phrase.

        Raises:
            InsufficientOperandsError: If the phrase has no tokens
            WordNotFoundError: Listing every token missing from the word space
        """
        tokens = tokenize(phrase)
        if not tokens:
            raise InsufficientOperandsError("Cannot compose an empty phrase")

        vectors = []
        missing = []
        for token in tokens:
            try:
                vectors.append(self.word_vector(token))
            except WordNotFoundError:
                missing.append(token)
        if missing:
            raise WordNotFoundError(missing)

        if len(vectors) == 1:
            return vectors[0]

        composition = self.method if method is None else CompositionMethodFactory.from_config(method)
        return compose_many(vectors, composition)

    def similarity(
        self,
        phrase1: str,
        phrase2: str,
        method: MethodSpec = None,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
    ) -> SimilarityResult:
        """
        Distributional similarity of two multi-word strings.

        Returns:
            Ok, WordNotFound (naming the missing tokens of both phrases),
            Undefined or UnsupportedMeasure
        """
        try:
            SimilarityMeasure.from_name(measure)
        except UnsupportedMeasureError:
            return UnsupportedMeasure(str(measure))

        missing: List[str] = []
        vectors: List[Optional[SparseVector]] = []
        for phrase in (phrase1, phrase2):
            try:
                vectors.append(self.compose_phrase(phrase, method))
            except WordNotFoundError as e:
                missing.extend(w for w in e.words if w not in missing)
                vectors.append(None)

        if missing:
            logger.debug(f"Compositional similarity failed, missing tokens: {missing}")
            return WordNotFound(tuple(missing))

        return semantic_similarity(vectors[0], vectors[1], measure)
