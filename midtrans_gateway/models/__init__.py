from midtrans_gateway.models.base import Base, TimestampMixin
from midtrans_gateway.models.gateway_log import GatewayLog
from midtrans_gateway.models.invoice import Invoice

__all__ = [
    "Base",
    "TimestampMixin",
    "GatewayLog",
    "Invoice",
]
