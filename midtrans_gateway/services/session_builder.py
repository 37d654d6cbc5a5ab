import logging
from decimal import Decimal
from typing import Iterable

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.schemas.midtrans import (
    CustomerDetails,
    InvoiceAllocation,
    PaymentSession,
    SessionResponse,
)
from midtrans_gateway.services import invoice_reference
from midtrans_gateway.services.midtrans_service import MidtransService

logger = logging.getLogger(__name__)


class SessionBuilder:
    """Builds the Snap transaction for a checkout and returns where to send the customer."""

    def __init__(self, midtrans: MidtransService):
        self.midtrans = midtrans

    def build(
        self,
        allocations: Iterable[InvoiceAllocation],
        gross_amount: Decimal,
        customer: CustomerDetails,
    ) -> PaymentSession:
        # Raises OrderReferenceTooLong before anything leaves the process
        order_id = invoice_reference.encode(allocations)
        return PaymentSession(
            order_id=order_id,
            gross_amount=gross_amount,
            customer=customer,
        )

    async def create_session(
        self,
        allocations: Iterable[InvoiceAllocation],
        gross_amount: Decimal,
        customer: CustomerDetails,
        config: GatewayConfig,
    ) -> SessionResponse:
        session = self.build(allocations, gross_amount, customer)

        params = session.to_snap_params()
        if config.enable_3ds:
            params["credit_card"] = {"secure": True}

        result = await self.midtrans.create_transaction(params, config)

        logger.info(
            f"[midtrans] session created — order_id={session.order_id}, "
            f"environment={config.environment}"
        )

        return SessionResponse(
            order_id=session.order_id,
            redirect_url=result["redirect_url"],
            token=result.get("token"),
        )
