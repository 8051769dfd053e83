"""Enrichment orchestration: cache, fetch, structure, fall back, store."""

import logging
from datetime import datetime, timezone

from enrichment_api.errors import ValidationError
from enrichment_api.models import EnrichmentRecord, StructuredSummary
from enrichment_api.services.enrichment_cache import EnrichmentCache
from enrichment_api.services.heuristic_extractor import HeuristicExtractor
from enrichment_api.services.openrouter_service import (
    OpenRouterService,
    Structured,
)
from enrichment_api.services.website_content_service import WebsiteContentService

logger = logging.getLogger(__name__)


class EnrichmentService:
    """Coordinates one enrichment request end to end.

    Stages run strictly in sequence for a given request. Concurrent misses
    for the same URL are not coalesced: each performs its own fetch and
    model call and the last one to finish owns the cache entry.
    """

    def __init__(
        self,
        cache: EnrichmentCache | None = None,
        content_service: WebsiteContentService | None = None,
        ai_service: OpenRouterService | None = None,
        heuristics: HeuristicExtractor | None = None,
    ) -> None:
        self.cache = cache if cache is not None else EnrichmentCache()
        self.content_service = content_service or WebsiteContentService()
        self.ai_service = ai_service or OpenRouterService()
        self.heuristics = heuristics or HeuristicExtractor()

    async def close(self) -> None:
        """Release HTTP clients held by the fetcher and the AI service."""
        await self.content_service.close()
        await self.ai_service.close()

    async def enrich(self, website: str | None) -> EnrichmentRecord:
        """Return the enrichment for ``website``, computing it on a cache miss.

        Raises:
            ValidationError: ``website`` is missing or blank.
            FetchError: The website could not be retrieved (nothing cached).
            ContentParseError: The website body could not be parsed.
            ProviderError: Classified AI provider failure (nothing cached).
        """
        if not isinstance(website, str) or not website.strip():
            raise ValidationError()

        cached = self.cache.get(website)
        if cached is not None:
            logger.info(f"Cache hit for {website}")
            return cached

        logger.info(f"Cache miss for {website}, fetching content")
        website_text = await self.content_service.fetch_text(website)

        structured = await self._structure(website_text, website)

        now = datetime.now(timezone.utc)
        record = EnrichmentRecord.assemble(structured, website, now)
        self.cache.set(website, record)
        logger.info(f"Enriched and cached {website}")
        return record

    async def _structure(self, website_text: str, website: str) -> StructuredSummary:
        outcome = await self.ai_service.structure(website_text, website)
        if isinstance(outcome, Structured):
            return outcome.result
        logger.warning(
            f"AI enrichment unavailable for {website} ({outcome.reason}), "
            "using heuristic extraction"
        )
        return self.heuristics.extract(website_text, website)
