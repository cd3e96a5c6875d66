"""
app/api/routers/deals.py

FX deal import HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends

from app.schemas.deals import DealImportResponse, DealRequest, ProblemDetailResponse
from app.services.deal_import_service import DealImportService, get_deal_import_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


@router.post(
    "",
    response_model=DealImportResponse,
    responses={
        400: {"model": ProblemDetailResponse},
        500: {"model": ProblemDetailResponse},
    },
)
def import_deals(
    deals: list[DealRequest] = Body(...),
    import_service: DealImportService = Depends(get_deal_import_service),
) -> DealImportResponse:
    """
    Import a batch of deals, skipping identifiers that are already stored.
    """

    logger.info("Received request to import %d deals", len(deals))
    summary = import_service.import_deals([deal.to_record() for deal in deals])
    return DealImportResponse.from_summary(summary)
