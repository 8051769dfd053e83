"""Core configuration for the enrichment API."""
