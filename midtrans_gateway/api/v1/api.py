from fastapi import APIRouter

from midtrans_gateway.api.v1.endpoints.midtrans.router import midtrans_router

api_router = APIRouter()

# Full paths: /api/v1/midtrans/session, /api/v1/midtrans/notification, etc.
api_router.include_router(
    midtrans_router,
    prefix="/midtrans",
    tags=["midtrans"],
)
