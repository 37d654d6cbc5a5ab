"""
Midtrans Capture / Void / Refund Routes.

Snap payments settle on the hosted page; this gateway does not offer
capture, void or refund. The routes exist so callers get a 501 instead
of a 404.
"""

from typing import Optional

from fastapi import APIRouter

from midtrans_gateway.core.exceptions import Unsupported
from midtrans_gateway.schemas.midtrans import (
    CaptureRequest,
    ErrorResponse,
    RefundRequest,
    VoidRequest,
)

router = APIRouter()

UNSUPPORTED_RESPONSES = {501: {"description": "Not supported", "model": ErrorResponse}}


@router.post("/capture", responses=UNSUPPORTED_RESPONSES, tags=["midtrans", "payments"])
async def capture_payment(body: Optional[CaptureRequest] = None):
    raise Unsupported("capture")


@router.post("/void", responses=UNSUPPORTED_RESPONSES, tags=["midtrans", "payments"])
async def void_payment(body: Optional[VoidRequest] = None):
    raise Unsupported("void")


@router.post("/refund", responses=UNSUPPORTED_RESPONSES, tags=["midtrans", "payments"])
async def refund_payment(body: Optional[RefundRequest] = None):
    raise Unsupported("refund")
