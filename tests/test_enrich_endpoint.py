"""Tests for the enrichment API endpoints.

Tests cover POST /api/enrich success, caching, validation and error
mapping, plus the health and root endpoints.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from enrichment_api.dependencies import get_enrichment_service
from enrichment_api.errors import (
    AuthFailure,
    BadStatus,
    ContentParseError,
    FetchRateLimited,
    FetchTimeout,
    ProviderNetworkError,
    QuotaExceeded,
    SiteUnreachable,
)
from enrichment_api.main import app
from enrichment_api.services import EnrichmentService

WEBSITE = "https://example.com"

RECORD_FIELDS = {"summary", "whatTheyDo", "keywords", "signals", "sources", "enrichedAt"}


class TestHealthEndpoint:
    """Test suite for GET /health."""

    def test_health(self, client):
        """Test health returns ok."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}


class TestRootEndpoint:
    """Test suite for GET /."""

    def test_root_metadata(self, client):
        """Test root returns API metadata."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Company Enrichment API"
        assert data["docs"]["openapi"] == "/openapi.json"


class TestEnrichSuccess:
    """Test suite for successful POST /api/enrich calls."""

    def test_returns_complete_record(self, client):
        """Test every field is present and non-null, in camelCase."""
        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert set(data) == RECORD_FIELDS
        assert all(data[field] is not None for field in RECORD_FIELDS)

    def test_heuristic_scenario(self, client):
        """Test the Series A text yields funding then customer signals."""
        response = client.post("/api/enrich", json={"website": WEBSITE})
        data = response.json()

        assert data["signals"] == [
            "Recently announced funding round",
            "Active customer engagement",
        ]
        assert data["keywords"][0] == "example.com"
        assert data["sources"][0]["url"] == WEBSITE

    def test_ai_result_returned(self, client, structured_ai_service, sample_structured_summary):
        """Test model output is returned when available."""
        response = client.post("/api/enrich", json={"website": WEBSITE})
        data = response.json()

        assert data["summary"] == sample_structured_summary.summary
        assert data["whatTheyDo"] == sample_structured_summary.what_they_do

    def test_cache_hit_is_identical(self, client, content_service):
        """Test a second request returns the cached body without refetching."""
        first = client.post("/api/enrich", json={"website": WEBSITE})
        second = client.post("/api/enrich", json={"website": WEBSITE})

        assert first.status_code == second.status_code == status.HTTP_200_OK
        assert second.json() == first.json()
        assert second.content == first.content
        assert content_service.fetch_text.await_count == 1


class TestEnrichValidation:
    """Test suite for request validation."""

    @pytest.mark.parametrize(
        "body",
        [{}, {"website": ""}, {"website": "   "}, {"website": None}, {"website": 123}],
    )
    def test_missing_website_returns_400(self, client, content_service, body):
        """Test missing or invalid website values return 400."""
        response = client.post("/api/enrich", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Website URL is required"}
        content_service.fetch_text.assert_not_called()

    def test_missing_body_returns_400(self, client, content_service):
        """Test a request without a body returns 400."""
        response = client.post("/api/enrich")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Website URL is required"}
        content_service.fetch_text.assert_not_called()


class TestEnrichErrors:
    """Test suite for error-to-status mapping."""

    @pytest.mark.parametrize(
        "error",
        [
            FetchTimeout(WEBSITE, "timed out"),
            SiteUnreachable(WEBSITE, "Name or service not known"),
            BadStatus(WEBSITE, 503),
        ],
    )
    def test_fetch_errors_return_502(self, client, content_service, cache, error):
        """Test fetch failures return 502 and create no cache entry."""
        content_service.fetch_text.side_effect = error

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json() == {
            "error": "Failed to fetch website content. The website may be unreachable."
        }
        assert cache.has(WEBSITE) is False

    def test_website_rate_limit_returns_429(self, client, content_service, cache):
        """Test a website answering 429 maps to the quota response."""
        content_service.fetch_text.side_effect = FetchRateLimited(WEBSITE)

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {"error": "API quota exceeded. Please try again later."}
        assert cache.has(WEBSITE) is False

    def test_content_parse_error_returns_422(self, client, content_service):
        """Test unparseable content returns 422."""
        content_service.fetch_text.side_effect = ContentParseError("bad html")

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == 422
        assert response.json() == {"error": "Failed to parse website content."}

    def test_quota_error_returns_429(self, client, ai_service, cache):
        """Test provider quota errors return 429."""
        ai_service.structure.side_effect = QuotaExceeded("rate limited")

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {"error": "API quota exceeded. Please try again later."}
        assert cache.has(WEBSITE) is False

    @pytest.mark.parametrize(
        "error, message",
        [
            (AuthFailure("401"), "API authentication failed."),
            (ProviderNetworkError("down"), "Network error connecting to AI service."),
        ],
    )
    def test_other_provider_errors_return_500(self, client, ai_service, error, message):
        """Test auth and network provider errors return 500."""
        ai_service.structure.side_effect = error

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": message}

    def test_unexpected_error_returns_500_with_message(self, client, content_service):
        """Test unclassified failures return 500 with the raw message."""
        content_service.fetch_text.side_effect = RuntimeError("something broke")

        response = client.post("/api/enrich", json={"website": WEBSITE})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "something broke"}


class TestServiceLifecycle:
    """Test how the enrichment service is provided to the router."""

    def test_lifespan_builds_and_clears_service(self):
        """Test the lifespan creates the service on startup and drops it on shutdown."""
        with TestClient(app) as lifespan_client:
            service = lifespan_client.app.state.enrichment_service
            assert isinstance(service, EnrichmentService)
            assert len(service.cache) == 0

        assert app.state.enrichment_service is None

    def test_dependency_requires_lifespan(self):
        """Test no service is created behind the lifespan's back."""
        request = MagicMock()
        request.app.state = SimpleNamespace()

        with pytest.raises(RuntimeError, match="not initialized"):
            get_enrichment_service(request)

        assert not hasattr(request.app.state, "enrichment_service")
