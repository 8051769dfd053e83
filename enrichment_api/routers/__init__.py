"""Routers package for API endpoints."""

from enrichment_api.routers import enrich

__all__ = ["enrich"]
