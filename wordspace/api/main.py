"""FastAPI application for word-space queries."""

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status

from wordspace import __version__
from wordspace.api.models import (
    WordPairRequest,
    SimilarityRequest,
    CompositionalSimilarityRequest,
    ScanRequest,
    SimilarityResponse,
    FrequencyResponse,
    NeighborItem,
    CollocationItem,
    CommonContextItem,
    ScoredWordItem,
    ScanResponse,
    HealthResponse,
    ErrorResponse,
)
from wordspace.core.config import Config, DEFAULT_CONFIG_PATH
from wordspace.core.exceptions import (
    InsufficientOperandsError,
    MalformedRecordError,
    UnsupportedMeasureError,
    WordNotFoundError,
)
from wordspace.core.results import Ok, SimilarityResult, UnsupportedMeasure, WordNotFound
from wordspace.scan.corpus_scan import CorpusScan
from wordspace.similarity.engine import SimilarityEngine
from wordspace.store.factory import WordSpaceStoreFactory

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Global engine instance
engine: Optional[SimilarityEngine] = None
scanner: Optional[CorpusScan] = None
default_measure: str = "kolb"


def initialize_engine(config_path: Optional[str] = None):
    """
    Open the word space named in the config and build the query services.

    Returns:
        (engine, scanner, default similarity measure)
    """
    config = Config.load(config_path or os.getenv("WORDSPACE_CONFIG", DEFAULT_CONFIG_PATH))

    logger.info("Opening word space...")
    store = WordSpaceStoreFactory.from_config(config.get_section("store"))
    logger.info(f"✓ Store: {store}")

    scan_config = config.get_section("scan")
    feature_mode = scan_config.get("feature_mode", "aggregated")
    composition = config.get_section("composition") or None
    query_engine = SimilarityEngine(
        store,
        composition=composition,
        feature_mode=feature_mode,
    )
    corpus_scan = CorpusScan(
        store,
        feature_mode=feature_mode,
        max_workers=scan_config.get("max_workers", 4),
        chunk_size=scan_config.get("chunk_size", 1000),
        parallel=bool(scan_config.get("parallel", False)),
        composition=composition,
    )
    logger.info("✓ Engine ready")
    measure = config.get("similarity.measure", "kolb")
    return query_engine, corpus_scan, measure


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    global engine, scanner, default_measure

    logger.info("Starting word-space API...")
    try:
        engine, scanner, default_measure = initialize_engine()
        logger.info("Word-space API started successfully")
    except Exception as e:
        logger.error(f"Failed to open word space: {e}")
        raise

    yield

    logger.info("Shutting down word-space API...")
    if engine is not None:
        engine.store.close()


app = FastAPI(
    title="Word Space API",
    description="Distributional similarity, collocations and nearest neighbours over a word space",
    version=__version__,
    lifespan=lifespan,
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


def _require_engine() -> SimilarityEngine:
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Word space not loaded",
        )
    return engine


def _not_found(words) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Word(s) not found: {', '.join(words)}",
    )


def _similarity_response(result: SimilarityResult) -> SimilarityResponse:
    """Map a tagged result onto HTTP semantics."""
    if isinstance(result, Ok):
        return SimilarityResponse(status=result.status, score=result.score)
    if isinstance(result, WordNotFound):
        raise _not_found(result.words)
    if isinstance(result, UnsupportedMeasure):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unsupported similarity measure: {result.measure}",
        )
    return SimilarityResponse(status=result.status, score=None, detail=result.reason)


def _corrupt(e: MalformedRecordError) -> HTTPException:
    logger.error(f"Corrupt record: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e),
    )


# ============== API Endpoints ==============

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Word Space API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check that the word space is readable."""
    query_engine = _require_engine()
    if not query_engine.health_check():
        return HealthResponse(status="degraded")
    return HealthResponse(status="healthy", words=query_engine.number_of_words())


@app.get("/words/{word}/frequency", response_model=FrequencyResponse, tags=["Words"])
async def frequency(word: str):
    """Corpus frequency of a word (0 if the word is unknown)."""
    return FrequencyResponse(word=word, frequency=_require_engine().frequency(word))


@app.get("/words/{word}/neighbors", response_model=List[NeighborItem], tags=["Words"])
async def neighbors(word: str, top_n: Optional[int] = None, min_similarity: Optional[float] = None):
    """Precomputed distributionally similar words, most similar first."""
    try:
        result = _require_engine().similar_words(word, top_n=top_n, min_similarity=min_similarity)
    except MalformedRecordError as e:
        raise _corrupt(e)
    if result is None:
        raise _not_found([word])
    return [NeighborItem(word=n.word, similarity=n.similarity) for n in result]


@app.get("/words/{word}/collocations", response_model=List[CollocationItem], tags=["Words"])
async def word_collocations(word: str, top_n: Optional[int] = None):
    """Collocations summed over positions, most significant first."""
    try:
        result = _require_engine().collocations(word, top_n=top_n)
    except MalformedRecordError as e:
        raise _corrupt(e)
    if result is None:
        raise _not_found([word])
    return [CollocationItem(word=c.word, value=c.value, relation=c.relation) for c in result]


@app.post("/similarity", response_model=SimilarityResponse, tags=["Similarity"])
async def similarity(request: SimilarityRequest):
    """First order (collocations) or second order (similar words) similarity."""
    query_engine = _require_engine()
    try:
        if request.order == 1:
            result = query_engine.first_order_similarity(request.word1, request.word2)
        else:
            result = query_engine.second_order_similarity(request.word1, request.word2)
    except MalformedRecordError as e:
        raise _corrupt(e)
    return _similarity_response(result)


@app.post("/similarity/compositional", response_model=SimilarityResponse, tags=["Similarity"])
def compositional_similarity(request: CompositionalSimilarityRequest):
    """Similarity of two phrases by composing their word vectors."""
    query_engine = _require_engine()
    try:
        result = query_engine.compositional_similarity(
            request.phrase1,
            request.phrase2,
            method=request.composition_config(),
            measure=request.measure or default_measure,
        )
    except UnsupportedMeasureError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InsufficientOperandsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MalformedRecordError as e:
        raise _corrupt(e)
    return _similarity_response(result)


@app.post("/common-context", response_model=List[CommonContextItem], tags=["Similarity"])
async def common_context(request: WordPairRequest):
    """Collocates shared by two words at the same position."""
    try:
        result = _require_engine().common_context(request.word1, request.word2)
    except MalformedRecordError as e:
        raise _corrupt(e)
    if result is None:
        raise _not_found([request.word1, request.word2])
    return [
        CommonContextItem(
            word=entry.word,
            relation=entry.relation,
            value_w1=entry.value_w1,
            value_w2=entry.value_w2,
        )
        for entry in result
    ]


@app.post("/scan", response_model=ScanResponse, tags=["Search"])
def scan(request: ScanRequest):
    """
    Most similar words for a word or phrase, searched over the whole word space.

    Scores every word in the word space; expect latency proportional to its size.
    """
    _require_engine()
    if scanner is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scanner not initialized",
        )
    try:
        result = scanner.similar_to_phrase(
            request.phrase,
            method=request.composition_config(),
            measure=request.measure or default_measure,
            parallel=request.parallel,
        )
    except WordNotFoundError as e:
        raise _not_found(e.words)
    except (UnsupportedMeasureError, InsufficientOperandsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ScanResponse(
        words=[ScoredWordItem(word=w.word, score=w.score) for w in result.top(request.top_k)],
        scanned=result.scanned,
        skipped=result.skipped,
    )


# Run with: uvicorn wordspace.api.main:app --reload
