import logging
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from midtrans_gateway.models.invoice import Invoice

logger = logging.getLogger(__name__)


class InvoiceDirectory(Protocol):
    """Resolves which client owns an invoice."""

    async def get_client_id(self, invoice_id: str) -> Optional[str]: ...


class SqlInvoiceDirectory:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_client_id(self, invoice_id: str) -> Optional[str]:
        result = await self.session.execute(
            select(Invoice.client_id).where(Invoice.id == invoice_id)
        )
        client_id = result.scalar_one_or_none()
        if client_id is None:
            logger.warning("No client found for invoice %s", invoice_id)
        return client_id
