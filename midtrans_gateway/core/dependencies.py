from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from midtrans_gateway.core.config import GatewayConfig, settings
from midtrans_gateway.core.database import get_db_session
from midtrans_gateway.services.audit_service import AuditSink, SqlAuditSink
from midtrans_gateway.services.invoice_directory import (
    InvoiceDirectory,
    SqlInvoiceDirectory,
)
from midtrans_gateway.services.midtrans_service import MidtransService, midtrans_service
from midtrans_gateway.services.reconciler import NotificationReconciler
from midtrans_gateway.services.session_builder import SessionBuilder


def get_gateway_config() -> GatewayConfig:
    return settings.gateway_config()


def get_midtrans_service() -> MidtransService:
    return midtrans_service


def get_invoice_directory(
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceDirectory:
    return SqlInvoiceDirectory(session)


def get_audit_sink(
    session: AsyncSession = Depends(get_db_session),
) -> AuditSink:
    return SqlAuditSink(session)


def get_reconciler(
    invoice_directory: InvoiceDirectory = Depends(get_invoice_directory),
    audit_sink: AuditSink = Depends(get_audit_sink),
    midtrans: MidtransService = Depends(get_midtrans_service),
) -> NotificationReconciler:
    return NotificationReconciler(invoice_directory, audit_sink, midtrans)


def get_session_builder(
    midtrans: MidtransService = Depends(get_midtrans_service),
) -> SessionBuilder:
    return SessionBuilder(midtrans)
