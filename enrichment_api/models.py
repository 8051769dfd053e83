"""Pydantic models for the company enrichment API.

Field names are snake_case in Python and serialized as camelCase so the
JSON shape matches what the frontend consumes (``whatTheyDo``,
``enrichedAt``).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class EnrichRequest(CamelModel):
    """Request body for ``POST /api/enrich``."""

    website: str | None = Field(
        default=None, description="Company website URL, used verbatim as the cache key"
    )


class Source(CamelModel):
    """Provenance of the data behind an enrichment."""

    url: str
    timestamp: datetime


class StructuredSummary(CamelModel):
    """Four-field business summary produced by the model or the heuristics.

    Attributes:
        summary: One or two sentences describing the company.
        what_they_do: Bullet points, 3-6 items.
        keywords: Keywords, 5-10 items.
        signals: Derived growth/traction indicators, 2-4 items.
    """

    summary: str
    what_they_do: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    signals: list[str] = Field(default_factory=list)


class EnrichmentRecord(StructuredSummary):
    """Complete enrichment returned to callers and stored in the cache."""

    sources: list[Source]
    enriched_at: datetime

    @classmethod
    def assemble(
        cls, structured: StructuredSummary, website: str, now: datetime
    ) -> "EnrichmentRecord":
        """Wrap a structured summary with provenance for ``website``."""
        return cls(
            summary=structured.summary,
            what_they_do=list(structured.what_they_do),
            keywords=list(structured.keywords),
            signals=list(structured.signals),
            sources=[Source(url=website, timestamp=now)],
            enriched_at=now,
        )


class CacheEntry(BaseModel):
    """A cached enrichment and the time it was written."""

    data: EnrichmentRecord
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx enrichment response."""

    error: str
