"""Pytest fixtures for the company enrichment API tests.

This module provides shared fixtures for testing the FastAPI application,
including the test client wired to an isolated EnrichmentService whose
fetcher and AI client are mocks.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from enrichment_api.dependencies import get_enrichment_service
from enrichment_api.main import app
from enrichment_api.models import StructuredSummary
from enrichment_api.services import (
    EnrichmentCache,
    EnrichmentService,
    OpenRouterService,
    Structured,
    Unavailable,
    WebsiteContentService,
)


@pytest.fixture
def sample_website_text():
    """Cleaned website text as returned by the content service.

    Returns:
        str: Text that trips the funding and customer signal rules.
    """
    return (
        "We are excited about our recent Series A funding and growing customer base"
    )


@pytest.fixture
def sample_structured_summary():
    """Structured summary as a well-behaved model would return it.

    Returns:
        StructuredSummary: Fully populated four-field summary.
    """
    return StructuredSummary(
        summary="Acme builds cloud accounting software for small businesses.",
        what_they_do=[
            "Sells subscription accounting software",
            "Automates invoicing and payroll",
            "Integrates with major banks",
        ],
        keywords=["accounting", "saas", "invoicing", "payroll", "smb"],
        signals=["Recently raised Series B", "Hiring across engineering"],
    )


@pytest.fixture
def cache():
    """Fresh, empty enrichment cache."""
    return EnrichmentCache()


@pytest.fixture
def content_service(sample_website_text):
    """Mock content service whose fetch_text returns the sample text."""
    service = MagicMock(spec=WebsiteContentService)
    service.fetch_text = AsyncMock(return_value=sample_website_text)
    service.close = AsyncMock()
    return service


@pytest.fixture
def ai_service():
    """Mock AI service that reports the model as unavailable."""
    service = MagicMock(spec=OpenRouterService)
    service.structure = AsyncMock(return_value=Unavailable("API key not configured"))
    service.close = AsyncMock()
    return service


@pytest.fixture
def structured_ai_service(ai_service, sample_structured_summary):
    """Mock AI service that returns the sample structured summary."""
    ai_service.structure.return_value = Structured(sample_structured_summary)
    return ai_service


@pytest.fixture
def enrichment_service(cache, content_service, ai_service):
    """EnrichmentService built from the isolated cache and mocks."""
    return EnrichmentService(
        cache=cache,
        content_service=content_service,
        ai_service=ai_service,
    )


@pytest.fixture
def client(enrichment_service):
    """Create a test client for the FastAPI application.

    The enrichment dependency is overridden so each test gets its own cache
    and mocks.

    Returns:
        TestClient: A test client instance for making requests to the API.
    """
    app.dependency_overrides[get_enrichment_service] = lambda: enrichment_service
    yield TestClient(app)
    app.dependency_overrides.clear()
