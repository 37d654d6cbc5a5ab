import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from midtrans_gateway.models.gateway_log import GatewayLog, generate_gateway_log_id

logger = logging.getLogger(__name__)

GATEWAY_NAME = "midtrans"


class AuditSink(Protocol):
    """Records one gateway log entry per handled callback."""

    async def record(
        self, url: str, data: str, direction: str, success: bool
    ) -> None: ...


class SqlAuditSink:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(self, url: str, data: str, direction: str, success: bool) -> None:
        entry = GatewayLog(
            id=generate_gateway_log_id(),
            gateway=GATEWAY_NAME,
            url=url,
            direction=direction,
            data=data,
            success=success,
        )
        self.session.add(entry)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Recorded gateway log %s (success=%s)", entry.id, success)
