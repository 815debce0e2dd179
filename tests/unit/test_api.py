"""Tests for FastAPI endpoints."""

import inspect
import math

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from wordspace.scan.corpus_scan import CorpusScan
from wordspace.similarity.engine import SimilarityEngine


class TestAPIModels:
    """Tests for API Pydantic models."""

    def test_similarity_request_defaults(self):
        """Should default to first order similarity."""
        from wordspace.api.models import SimilarityRequest

        req = SimilarityRequest(word1="house", word2="building")
        assert req.order == 1

    def test_similarity_request_rejects_order(self):
        from pydantic import ValidationError
        from wordspace.api.models import SimilarityRequest

        with pytest.raises(ValidationError):
            SimilarityRequest(word1="house", word2="building", order=3)

    def test_composition_lambda_alias(self):
        """Should accept 'lambda' as the dilation factor."""
        from wordspace.api.models import CompositionalSimilarityRequest

        req = CompositionalSimilarityRequest.model_validate({
            "phrase1": "red wine",
            "phrase2": "white wine",
            "method": "dilation",
            "lambda": 3.0,
        })

        assert req.lambda_ == 3.0
        assert req.composition_config()["lambda"] == 3.0

    def test_composition_defers_to_server(self):
        """Should leave the method to the server when the request names none."""
        from wordspace.api.models import ScanRequest

        assert ScanRequest(phrase="house building", alpha=0.5).composition_config() is None

    def test_scan_request_top_k_bounds(self):
        from pydantic import ValidationError
        from wordspace.api.models import ScanRequest

        assert ScanRequest(phrase="house").top_k == 10
        with pytest.raises(ValidationError):
            ScanRequest(phrase="house", top_k=0)


class TestAPIEndpoints:
    """Tests for API endpoints using TestClient."""

    @pytest.fixture
    def client(self, store):
        import wordspace.api.main as api_main

        api_main.engine = SimilarityEngine(store)
        api_main.scanner = CorpusScan(store, chunk_size=2)
        yield TestClient(api_main.app, raise_server_exceptions=False)
        api_main.engine = None
        api_main.scanner = None

    def test_root_endpoint(self, client):
        """Should return API info."""
        response = client.get("/")
        assert response.status_code == 200
        assert "name" in response.json()

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "words": 4}

    def test_health_endpoint_degraded(self):
        """Should return degraded when the store is unreadable."""
        import wordspace.api.main as api_main

        mock_engine = MagicMock()
        mock_engine.health_check.return_value = False
        api_main.engine = mock_engine

        client = TestClient(api_main.app, raise_server_exceptions=False)

        response = client.get("/health")
        api_main.engine = None
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_no_engine(self):
        """Should return 503 when the word space is not loaded."""
        import wordspace.api.main as api_main

        api_main.engine = None
        client = TestClient(api_main.app, raise_server_exceptions=False)

        assert client.get("/health").status_code == 503
        assert client.get("/words/house/frequency").status_code == 503
        assert client.post("/similarity", json={"word1": "a", "word2": "b"}).status_code == 503

    def test_frequency(self, client):
        assert client.get("/words/house/frequency").json() == {"word": "house", "frequency": 1200}
        assert client.get("/words/castle/frequency").json()["frequency"] == 0

    def test_neighbors(self, client):
        response = client.get("/words/house/neighbors", params={"top_n": 1})
        assert response.status_code == 200
        assert response.json() == [{"word": "building", "similarity": 0.5}]

    def test_neighbors_missing(self, client):
        assert client.get("/words/castle/neighbors").status_code == 404

    def test_collocations(self, client):
        response = client.get("/words/house/collocations")
        assert [c["word"] for c in response.json()] == ["the", "stands", "big"]

    def test_first_order_similarity(self, client):
        response = client.post("/similarity", json={"word1": "house", "word2": "building"})
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["score"] == pytest.approx(8 / 10.5)

    def test_second_order_similarity(self, client):
        response = client.post("/similarity", json={"word1": "house", "word2": "tower", "order": 2})
        assert response.json()["score"] == pytest.approx(0.625 / 0.875)

    def test_undefined_similarity(self, client):
        """Should return 200 with a null score."""
        response = client.post("/similarity", json={"word1": "loner", "word2": "loner"})
        assert response.status_code == 200
        assert response.json()["status"] == "undefined"
        assert response.json()["score"] is None

    def test_similarity_missing_word(self, client):
        response = client.post("/similarity", json={"word1": "house", "word2": "castle"})
        assert response.status_code == 404
        assert "castle" in response.json()["detail"]

    def test_invalid_order(self, client):
        response = client.post("/similarity", json={"word1": "house", "word2": "tower", "order": 3})
        assert response.status_code == 422

    def test_compositional_similarity(self, client):
        response = client.post("/similarity/compositional", json={
            "phrase1": "house building",
            "phrase2": "house building",
        })
        assert response.status_code == 200
        assert response.json()["score"] == pytest.approx(1.0)

    def test_compositional_unknown_measure(self, client):
        response = client.post("/similarity/compositional", json={
            "phrase1": "house",
            "phrase2": "tower",
            "measure": "euclid",
        })
        assert response.status_code == 422

    def test_compositional_unknown_method(self, client):
        response = client.post("/similarity/compositional", json={
            "phrase1": "house building",
            "phrase2": "tower",
            "method": "tensor",
        })
        assert response.status_code == 400

    def test_common_context(self, client):
        response = client.post("/common-context", json={"word1": "house", "word2": "building"})
        assert response.status_code == 200
        assert response.json()[0] == {
            "word": "the",
            "relation": 1,
            "value_w1": 3.0,
            "value_w2": 2.0,
        }

    def test_common_context_empty(self, client):
        response = client.post("/common-context", json={"word1": "house", "word2": "tower"})
        assert response.status_code == 200
        assert response.json() == []

    def test_common_context_missing(self, client):
        response = client.post("/common-context", json={"word1": "house", "word2": "castle"})
        assert response.status_code == 404

    def test_scan(self, client):
        response = client.post("/scan", json={"phrase": "house", "top_k": 1})
        assert response.status_code == 200
        body = response.json()
        assert [w["word"] for w in body["words"]] == ["house"]
        assert body["scanned"] == 4
        assert body["skipped"] == 0

    def test_scan_parallel(self, client):
        sequential = client.post("/scan", json={"phrase": "house building"}).json()
        parallel = client.post("/scan", json={"phrase": "house building", "parallel": True}).json()
        assert parallel["words"] == sequential["words"]

    def test_scan_missing_word(self, client):
        response = client.post("/scan", json={"phrase": "house moat"})
        assert response.status_code == 404

    def test_scan_unknown_measure(self, client):
        response = client.post("/scan", json={"phrase": "house", "measure": "euclid"})
        assert response.status_code == 400

    def test_blocking_endpoints_run_in_threadpool(self):
        """Should declare scoring endpoints sync so they do not block the event loop."""
        import wordspace.api.main as api_main

        assert not inspect.iscoroutinefunction(api_main.scan)
        assert not inspect.iscoroutinefunction(api_main.compositional_similarity)


class TestServerComposition:
    """Tests for the configured composition method."""

    @pytest.fixture
    def client(self, store):
        import wordspace.api.main as api_main

        api_main.engine = SimilarityEngine(store, composition="addition")
        api_main.scanner = CorpusScan(store, chunk_size=2, composition="addition")
        yield TestClient(api_main.app, raise_server_exceptions=False)
        api_main.engine = None
        api_main.scanner = None

    def test_compositional_uses_configured_method(self, client):
        response = client.post("/similarity/compositional", json={
            "phrase1": "house building",
            "phrase2": "tower",
            "measure": "cosine",
        })

        # house + building = {the: 5, big: 1, stands: 3, tall: 1.5}
        assert response.status_code == 200
        assert response.json()["score"] == pytest.approx(6 / (math.sqrt(37.25) * 4))

    def test_request_method_overrides(self, client):
        response = client.post("/similarity/compositional", json={
            "phrase1": "house building",
            "phrase2": "tower",
            "method": "combined",
            "measure": "cosine",
        })

        assert response.json()["score"] == pytest.approx(0.0)

    def test_scan_uses_configured_method(self, client):
        response = client.post("/scan", json={"phrase": "house building", "measure": "cosine"})

        assert response.status_code == 200
        assert "tower" in [w["word"] for w in response.json()["words"]]


class TestInitializeEngine:
    """Tests for building the services from config."""

    def test_initialize_from_config(self, wordspace_dir, tmp_path):
        import wordspace.api.main as api_main
        from wordspace.core.config import Config

        Config.reset()
        config_file = tmp_path / "api.yaml"
        config_file.write_text(f"""
store:
  provider: jsonl
  path: {wordspace_dir}
  load_into_memory: true
composition:
  method: addition
similarity:
  measure: cosine
scan:
  parallel: true
  max_workers: 2
  chunk_size: 2
""")

        engine, scanner, measure = api_main.initialize_engine(str(config_file))

        assert engine.number_of_words() == 4
        assert engine.pipeline.method.name == "addition"
        assert scanner.pipeline.method.name == "addition"
        assert scanner.parallel is True
        assert measure == "cosine"
        engine.store.close()
        Config.reset()
