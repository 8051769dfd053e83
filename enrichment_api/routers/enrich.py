"""Enrichment router.

Exposes the enrichment pipeline as ``POST /api/enrich``.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from enrichment_api.dependencies import get_enrichment_service
from enrichment_api.errors import EnrichmentError
from enrichment_api.models import EnrichmentRecord, EnrichRequest, ErrorResponse
from enrichment_api.services import EnrichmentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/enrich",
    response_model=EnrichmentRecord,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    },
)
async def enrich_website(
    payload: EnrichRequest,
    service: Annotated[EnrichmentService, Depends(get_enrichment_service)],
) -> EnrichmentRecord:
    """Enrich a company website with an AI-generated business summary.

    Results are cached per exact URL string for the lifetime of the process,
    so repeated calls return the first result without refetching.
    """
    try:
        return await service.enrich(payload.website)
    except EnrichmentError:
        raise
    except Exception as e:
        logger.exception(f"Enrichment failed for {payload.website}: {e}")
        raise EnrichmentError(str(e) or "Enrichment failed") from e
