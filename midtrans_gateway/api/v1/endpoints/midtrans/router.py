"""
Midtrans Router Aggregator.

Combines all Midtrans sub-routers into a single router. When registered
in the main app under /api/v1 with prefix /midtrans, the full paths become:

  POST /api/v1/midtrans/session        — Create Snap payment session
  POST /api/v1/midtrans/notification   — Midtrans HTTP notification receiver
  GET  /api/v1/midtrans/return         — Customer return from Snap
  POST /api/v1/midtrans/capture        — 501
  POST /api/v1/midtrans/void           — 501
  POST /api/v1/midtrans/refund         — 501

"""

from fastapi import APIRouter

from midtrans_gateway.api.v1.endpoints.midtrans.notification import router as notification_router
from midtrans_gateway.api.v1.endpoints.midtrans.redirect import router as return_router
from midtrans_gateway.api.v1.endpoints.midtrans.session import router as session_router
from midtrans_gateway.api.v1.endpoints.midtrans.unsupported import router as unsupported_router

midtrans_router = APIRouter()

midtrans_router.include_router(session_router)
midtrans_router.include_router(notification_router)
midtrans_router.include_router(return_router)
midtrans_router.include_router(unsupported_router)
