"""Services package for the company enrichment pipeline."""

from enrichment_api.services.enrichment_cache import EnrichmentCache
from enrichment_api.services.enrichment_service import EnrichmentService
from enrichment_api.services.heuristic_extractor import HeuristicExtractor
from enrichment_api.services.openrouter_service import (
    OpenRouterService,
    Structured,
    StructuringOutcome,
    Unavailable,
)
from enrichment_api.services.website_content_service import WebsiteContentService

__all__ = [
    "EnrichmentCache",
    "EnrichmentService",
    "HeuristicExtractor",
    "OpenRouterService",
    "Structured",
    "StructuringOutcome",
    "Unavailable",
    "WebsiteContentService",
]
