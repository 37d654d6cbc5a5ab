"""
Midtrans Notification Route.

Endpoint:
  POST /api/v1/midtrans/notification — Receive HTTP notifications from Midtrans

Responds 200 {success, message} once the notification is verified and
reconciled, 403 {error, message} when the signature does not match, and
400 when the body is not a notification object.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.dependencies import get_gateway_config, get_reconciler
from midtrans_gateway.schemas.midtrans import ErrorResponse, NotificationAck
from midtrans_gateway.services.reconciler import NotificationReconciler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/notification",
    response_model=NotificationAck,
    summary="Receive Midtrans payment notifications",
    description=(
        "Verifies the signature_key of a Midtrans HTTP notification, "
        "recovers the paid invoices from the order id and maps the status. "
    ),
    responses={
        400: {"description": "Malformed notification", "model": ErrorResponse},
        403: {"description": "Signature mismatch", "model": ErrorResponse},
        422: {"description": "Unknown transaction status", "model": ErrorResponse},
    },
    tags=["midtrans", "webhooks"],
)
async def handle_notification(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
    reconciler: NotificationReconciler = Depends(get_reconciler),
):
    """
    POST /api/v1/midtrans/notification

    The body is handed to the reconciler unvalidated so that malformed
    callbacks are still written to the gateway log.

    """
    body = await request.body()
    try:
        payload = json.loads(body)
    except ValueError:
        payload = body.decode("utf-8", errors="replace")

    result = await reconciler.handle_notification(
        payload, config, request_url=str(request.url)
    )

    return JSONResponse(
        content=result.ack.model_dump(mode="json", exclude_none=True),
        status_code=200,
    )
