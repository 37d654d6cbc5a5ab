"""
Midtrans Session Route.

Endpoint:
  POST /api/v1/midtrans/session — Create a Snap payment session

The invoices being paid are packed into the Midtrans order_id; the
response carries the hosted payment page the customer is sent to.
"""

import logging

from fastapi import APIRouter, Depends

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.dependencies import get_gateway_config, get_session_builder
from midtrans_gateway.schemas.midtrans import ErrorResponse, SessionRequest, SessionResponse
from midtrans_gateway.services.session_builder import SessionBuilder

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/session",
    response_model=SessionResponse,
    summary="Create a Midtrans Snap payment session",
    description=(
        "Encodes the invoices into an order id, creates a Snap transaction "
        "and returns the redirect URL of the hosted payment page. "
    ),
    responses={
        400: {"description": "Order reference too long", "model": ErrorResponse},
        500: {"description": "Gateway not configured", "model": ErrorResponse},
        502: {"description": "Midtrans rejected the request", "model": ErrorResponse},
    },
    tags=["midtrans", "payments"],
)
async def create_session(
    body: SessionRequest,
    config: GatewayConfig = Depends(get_gateway_config),
    builder: SessionBuilder = Depends(get_session_builder),
):
    """
    POST /api/v1/midtrans/session

    Build the Snap transaction for the given invoices and customer.

    """
    return await builder.create_session(
        allocations=body.invoices,
        gross_amount=body.amount,
        customer=body.customer,
        config=config,
    )
