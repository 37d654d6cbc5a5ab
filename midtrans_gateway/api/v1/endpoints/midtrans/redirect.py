"""
Midtrans Return Route.

Endpoint:
  GET /api/v1/midtrans/return — Customer redirected back from Snap

Midtrans appends order_id to the finish URL. The status is not trusted
from the query string; it is fetched from Midtrans and verified.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.dependencies import get_gateway_config, get_reconciler
from midtrans_gateway.schemas.midtrans import CanonicalTransaction, ErrorResponse
from midtrans_gateway.services.reconciler import NotificationReconciler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/return",
    response_model=CanonicalTransaction,
    summary="Reconcile a customer returning from Midtrans",
    responses={
        403: {"description": "Signature mismatch", "model": ErrorResponse},
        502: {"description": "Midtrans status query failed", "model": ErrorResponse},
    },
    tags=["midtrans", "payments"],
)
async def handle_return(
    request: Request,
    order_id: str = Query(..., min_length=1, description="Midtrans order id"),
    config: GatewayConfig = Depends(get_gateway_config),
    reconciler: NotificationReconciler = Depends(get_reconciler),
):
    """
    GET /api/v1/midtrans/return

    """
    return await reconciler.handle_return(order_id, config, request_url=str(request.url))
