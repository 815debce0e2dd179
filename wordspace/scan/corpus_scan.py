"""Brute-force nearest-neighbour search over the whole word space."""
import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from wordspace.codec.vector_codec import FeatureMode, decode_word_vector
from wordspace.composition.pipeline import CompositionPipeline, MethodSpec
from wordspace.core.exceptions import MalformedRecordError
from wordspace.core.results import Ok
from wordspace.core.types import ScanResult, ScoredWord, SparseVector, WordRecord
from wordspace.similarity.measures import SimilarityMeasure, semantic_similarity
from wordspace.store.base import BaseWordSpaceStore

logger = logging.getLogger(__name__)


class CorpusScan:
    """
    Find the words most similar to an arbitrary query vector.

    Cost contract: every call decodes and scores every record in the
    store, O(N * |vector|). This is by far the most expensive query; use
    a store loaded into memory, and prefer ``similar_words_parallel`` or
    ``iter_scores`` for large word spaces.

    Usage:
        scan = CorpusScan(store)
        result = scan.similar_words(query_vector, SimilarityMeasure.COSINE)
        for hit in result.top(10):
            print(hit.word, hit.score)
    """

    def __init__(
        self,
        store: BaseWordSpaceStore,
        feature_mode: Union[str, FeatureMode] = FeatureMode.AGGREGATED,
        max_workers: int = 4,
        chunk_size: int = 1000,
        parallel: bool = False,
        composition: MethodSpec = None,
    ):
        """
        Args:
            store: Word space to scan
            feature_mode: How record vectors are keyed; must match the
                query vector
            max_workers: Threads used by similar_words_parallel
            chunk_size: Records per task in similar_words_parallel
            parallel: Default for similar_to_phrase
            composition: Default composition method for similar_to_phrase
        """
        self.store = store
        self.feature_mode = FeatureMode.from_name(feature_mode)
        self.max_workers = max_workers
        self.chunk_size = chunk_size
        self.parallel = parallel
        self.pipeline = CompositionPipeline(store, method=composition, feature_mode=self.feature_mode)

    def _score(
        self,
        query: SparseVector,
        record: WordRecord,
        measure: SimilarityMeasure,
    ) -> Optional[ScoredWord]:
        """Score one record; None if it has no defined score."""
        vector = decode_word_vector(record, self.feature_mode)
        result = semantic_similarity(query, vector, measure)
        if isinstance(result, Ok):
            return ScoredWord(word=record.word, score=result.score)
        return None

    def _score_chunk(
        self,
        query: SparseVector,
        chunk: Iterable[Tuple[int, WordRecord]],
        measure: SimilarityMeasure,
    ) -> Tuple[List[Tuple[int, ScoredWord]], int, int]:
        """Score (position, record) pairs; returns (hits, malformed, seen)."""
        hits = []
        malformed = 0
        seen = 0
        for position, record in chunk:
            seen += 1
            try:
                scored = self._score(query, record, measure)
            except MalformedRecordError as e:
                malformed += 1
                logger.debug(f"Skipping corrupt record: {e}")
                continue
            if scored is not None and scored.score > 0.0:
                hits.append((position, scored))
        return hits, malformed, seen

    def iter_scores(
        self,
        query: SparseVector,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
    ) -> Iterator[ScoredWord]:
        """
        Stream the score of every record in store order.

        Records without a defined score or with corrupt fields are left out.
        Nothing is filtered by value or sorted.

        Raises:
            UnsupportedMeasureError: If the measure is unknown
        """
        measure = SimilarityMeasure.from_name(measure)
        for record in self.store.iterate_all():
            try:
                scored = self._score(query, record, measure)
            except MalformedRecordError as e:
                logger.debug(f"Skipping corrupt record: {e}")
                continue
            if scored is not None:
                yield scored

    def similar_words(
        self,
        query: SparseVector,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
    ) -> ScanResult:
        """
        All words with a strictly positive score, highest first.

        Ties keep the store's iteration order. Corrupt records are skipped
        and counted in ``ScanResult.skipped``.

        Raises:
            UnsupportedMeasureError: If the measure is unknown
        """
        measure = SimilarityMeasure.from_name(measure)
        hits, malformed, seen = self._score_chunk(
            query, enumerate(self.store.iterate_all()), measure
        )
        return self._finish(hits, scanned=seen - malformed, malformed=malformed)

    def similar_words_parallel(
        self,
        query: SparseVector,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
        max_workers: Optional[int] = None,
    ) -> ScanResult:
        """
        Same result as ``similar_words``, scored on a thread pool.

        Records are scored in chunks; sorting happens only once every
        chunk has been collected. At most two chunks per worker are read
        ahead of the oldest unfinished one, so memory stays bounded by the
        chunk size rather than the word space.

        Decoding and scoring hold the GIL, so the threads mainly overlap
        scoring with the store's disk reads (``load_into_memory=False``).
        """
        measure = SimilarityMeasure.from_name(measure)
        workers = max_workers or self.max_workers
        max_pending = workers * 2

        hits: List[Tuple[int, ScoredWord]] = []
        malformed = 0
        total = 0

        def collect(future) -> None:
            nonlocal malformed
            chunk_hits, chunk_malformed, _ = future.result()
            hits.extend(chunk_hits)
            malformed += chunk_malformed

        with ThreadPoolExecutor(max_workers=workers) as executor:
            pending = deque()
            for chunk in self._chunks(enumerate(self.store.iterate_all())):
                total += len(chunk)
                pending.append(executor.submit(self._score_chunk, query, chunk, measure))
                if len(pending) >= max_pending:
                    collect(pending.popleft())
            while pending:
                collect(pending.popleft())

        logger.debug(f"Parallel scan finished: {total} records, {workers} workers")
        return self._finish(hits, scanned=total - malformed, malformed=malformed)

    def similar_to_phrase(
        self,
        phrase: str,
        method: MethodSpec = None,
        measure: Union[str, SimilarityMeasure] = SimilarityMeasure.KOLB,
        parallel: Optional[bool] = None,
    ) -> ScanResult:
        """
        Compose a phrase into one vector and scan the word space with it.

        ``method`` overrides the composition the scan was built with.

        Raises:
            WordNotFoundError: If a token of the phrase is missing
        """
        query = self.pipeline.compose_phrase(phrase, method)
        if parallel is None:
            parallel = self.parallel
        if parallel:
            return self.similar_words_parallel(query, measure)
        return self.similar_words(query, measure)

    def _chunks(self, items: Iterable) -> Iterator[list]:
        iterator = iter(items)
        while True:
            chunk = list(islice(iterator, self.chunk_size))
            if not chunk:
                return
            yield chunk

    def _finish(
        self,
        hits: List[Tuple[int, ScoredWord]],
        scanned: int,
        malformed: int,
    ) -> ScanResult:
        hits.sort(key=lambda item: (-item[1].score, item[0]))
        skipped = malformed + self.store.skipped_entries
        if skipped:
            logger.warning(f"Scan skipped {skipped} corrupt entries")
        logger.info(f"Scanned {scanned} words, {len(hits)} with positive similarity")
        return ScanResult(
            words=[scored for _, scored in hits],
            scanned=scanned,
            skipped=skipped,
        )
