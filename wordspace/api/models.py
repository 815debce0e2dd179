"""Pydantic models for API request/response schemas."""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict


# ============== Request Models ==============

class WordPairRequest(BaseModel):
    """Request body for word-pair queries."""
    model_config = ConfigDict(json_schema_extra={
        "example": {"word1": "house", "word2": "building"}
    })

    word1: str = Field(..., min_length=1, max_length=200, description="First word")
    word2: str = Field(..., min_length=1, max_length=200, description="Second word")


class SimilarityRequest(WordPairRequest):
    """Request body for first/second order similarity."""
    order: Literal[1, 2] = Field(default=1, description="1 = collocations, 2 = similar words")


class CompositionRequest(BaseModel):
    """Composition settings shared by phrase queries."""
    method: Optional[str] = Field(
        default=None,
        description="addition, multiplication, combined, dilation; server default if unset",
    )
    alpha: Optional[float] = Field(default=None, description="Combined: weight of first vector")
    beta: Optional[float] = Field(default=None, description="Combined: weight of second vector")
    gamma: Optional[float] = Field(default=None, description="Combined: weight of product")
    lambda_: Optional[float] = Field(default=None, alias="lambda", description="Dilation factor")
    measure: Optional[str] = Field(default=None, description="cosine or kolb; server default if unset")

    model_config = ConfigDict(populate_by_name=True)

    def composition_config(self) -> Optional[dict]:
        """Method and weights of the request, or None to use the server's composition."""
        if self.method is None:
            return None
        return {
            "method": self.method,
            "alpha": self.alpha,
            "beta": self.beta,
            "gamma": self.gamma,
            "lambda": self.lambda_,
        }


class CompositionalSimilarityRequest(CompositionRequest):
    """Request body for phrase-to-phrase similarity."""
    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {
            "phrase1": "red wine",
            "phrase2": "white wine",
            "method": "addition",
            "measure": "cosine",
        }
    })

    phrase1: str = Field(..., min_length=1, max_length=2000)
    phrase2: str = Field(..., min_length=1, max_length=2000)


class ScanRequest(CompositionRequest):
    """Request body for nearest-neighbour search over the whole word space."""
    phrase: str = Field(..., min_length=1, max_length=2000, description="Word or phrase to search for")
    top_k: int = Field(default=10, ge=1, le=1000, description="Number of words to return")
    parallel: Optional[bool] = Field(default=None, description="Score on a thread pool; server default if unset")


# ============== Response Models ==============

class SimilarityResponse(BaseModel):
    """A similarity score with its status."""
    status: str = Field(..., description="ok or undefined")
    score: Optional[float] = Field(default=None, description="Similarity, null if undefined")
    detail: Optional[str] = None


class FrequencyResponse(BaseModel):
    word: str
    frequency: int


class NeighborItem(BaseModel):
    word: str
    similarity: float


class CollocationItem(BaseModel):
    word: str
    value: float
    relation: Optional[int] = None


class CommonContextItem(BaseModel):
    word: str
    relation: int
    value_w1: float
    value_w2: float


class ScoredWordItem(BaseModel):
    word: str
    score: float


class ScanResponse(BaseModel):
    words: List[ScoredWordItem]
    scanned: int
    skipped: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="healthy or degraded")
    words: Optional[int] = Field(default=None, description="Words in the word space")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str
