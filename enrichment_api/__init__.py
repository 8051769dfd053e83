"""Company website enrichment API."""
