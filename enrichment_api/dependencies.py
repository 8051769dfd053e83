"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from enrichment_api.services import EnrichmentService


def get_enrichment_service(request: Request) -> EnrichmentService:
    """Return the EnrichmentService built by the app lifespan.

    Raises:
        RuntimeError: The app was started without running its lifespan, so no
            service (and no cache) exists.
    """
    service = getattr(request.app.state, "enrichment_service", None)
    if service is None:
        raise RuntimeError(
            "Enrichment service not initialized. Run the app with its lifespan enabled."
        )
    return service
