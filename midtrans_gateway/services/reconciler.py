"""
Midtrans Notification Reconciler.

Turns a Midtrans callback into the transaction record the billing
platform applies to its invoices. Two entry points share one pipeline:

  handle_notification — HTTP notification POSTed by Midtrans
  handle_return       — customer redirected back; status fetched from Midtrans

Pipeline: verify signature → decode order reference → resolve client
→ map status → assemble CanonicalTransaction.

Every invocation writes one gateway log entry, whatever the outcome.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import ValidationError

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.exceptions import (
    ClientNotFound,
    MalformedNotification,
    MalformedOrderReference,
    RemoteServiceError,
    SignatureMismatch,
)
from midtrans_gateway.schemas.midtrans import (
    CanonicalTransaction,
    NotificationAck,
    NotificationPayload,
    NotificationResult,
)
from midtrans_gateway.services import invoice_reference, signature
from midtrans_gateway.services.audit_service import AuditSink
from midtrans_gateway.services.invoice_directory import InvoiceDirectory
from midtrans_gateway.services.midtrans_service import MidtransService
from midtrans_gateway.services.status_mapper import map_status

logger = logging.getLogger(__name__)

AUDIT_DIRECTION = "output"


class NotificationReconciler:
    def __init__(
        self,
        invoice_directory: InvoiceDirectory,
        audit_sink: AuditSink,
        midtrans: MidtransService,
    ):
        self.invoice_directory = invoice_directory
        self.audit_sink = audit_sink
        self.midtrans = midtrans

    # ──────────────────────────────────────────────────────────────
    # Entry points
    # ──────────────────────────────────────────────────────────────

    async def handle_notification(
        self,
        raw: Any,
        config: GatewayConfig,
        request_url: str,
    ) -> NotificationResult:
        """
        Reconcile an HTTP notification body as received. Raises
        SignatureMismatch (403) when it does not authenticate and
        MalformedNotification (400) when it is not a Midtrans notification;
        no transaction is produced then.
        """
        order_id = raw.get("order_id") if isinstance(raw, dict) else None
        logger.info(f"[midtrans] notification received — order_id={order_id}")

        transaction = await self._reconcile_and_audit(raw, config, request_url)

        return NotificationResult(
            ack=NotificationAck(
                success=True,
                message=f"Notification for order {order_id} accepted",
                transaction=transaction,
            ),
            transaction=transaction,
        )

    async def handle_return(
        self,
        order_id: str,
        config: GatewayConfig,
        request_url: str,
    ) -> CanonicalTransaction:
        """
        Reconcile a browser return by asking Midtrans for the order's status.
        """
        logger.info(f"[midtrans] customer returned — order_id={order_id}")

        raw: Dict[str, Any] = {"order_id": order_id}
        try:
            raw = await self.midtrans.get_status(order_id, config)
        except Exception:
            await self._audit(request_url, raw, success=False)
            raise

        return await self._reconcile_and_audit(raw, config, request_url)

    # ──────────────────────────────────────────────────────────────
    # Pipeline
    # ──────────────────────────────────────────────────────────────

    async def _reconcile_and_audit(
        self,
        raw: Any,
        config: GatewayConfig,
        request_url: str,
    ) -> CanonicalTransaction:
        success = False
        try:
            transaction = await self.reconcile(_parse_payload(raw), config)
            success = True
            return transaction
        finally:
            await self._audit(request_url, raw, success=success)

    async def reconcile(
        self, payload: NotificationPayload, config: GatewayConfig
    ) -> CanonicalTransaction:
        if not signature.verify(payload, config.server_key.get_secret_value()):
            logger.warning(
                f"[midtrans] signature mismatch — order_id={payload.order_id}"
            )
            raise SignatureMismatch(
                "Signature verification failed",
                details={"order_id": payload.order_id},
            )

        invoices = invoice_reference.decode(payload.order_id)
        if not invoices:
            raise MalformedOrderReference(
                "No invoice allocation could be recovered from the order id",
                details={"order_id": payload.order_id},
            )

        client_id = await self.invoice_directory.get_client_id(invoices[0].invoice_id)
        if not client_id:
            raise ClientNotFound(
                f"No client owns invoice {invoices[0].invoice_id}",
                details={"invoice_id": invoices[0].invoice_id},
            )

        status = map_status(
            payload.transaction_status,
            payload.payment_type,
            payload.fraud_status,
        )

        transaction = CanonicalTransaction(
            client_id=str(client_id),
            amount=_parse_amount(payload.gross_amount),
            currency=payload.currency.upper() if payload.currency else None,
            status=status,
            reference_id=payload.payment_type,
            transaction_id=payload.transaction_id,
            parent_transaction_id=None,
            invoices=invoices,
        )

        logger.info(
            f"[midtrans] reconciled — order_id={payload.order_id}, "
            f"client_id={transaction.client_id}, status={status.value}"
        )
        return transaction

    async def _audit(self, url: str, raw: Any, success: bool) -> None:
        try:
            await self.audit_sink.record(
                url=url,
                data=json.dumps(raw, default=str),
                direction=AUDIT_DIRECTION,
                success=success,
            )
        except Exception as e:
            logger.error(f"[midtrans] failed to write gateway log: {e}")


def _parse_amount(value: Optional[str]) -> Decimal:
    try:
        amount = Decimal(value or "")
    except InvalidOperation:
        raise RemoteServiceError(
            f"Midtrans reported an unreadable gross_amount: {value!r}",
            details={"gross_amount": value},
        )
    if not amount.is_finite():
        raise RemoteServiceError(
            f"Midtrans reported a non-finite gross_amount: {value!r}",
            details={"gross_amount": value},
        )
    return amount


def _parse_payload(raw: Any) -> NotificationPayload:
    try:
        return NotificationPayload.model_validate(raw)
    except ValidationError as e:
        raise MalformedNotification(
            "Notification body is not a Midtrans notification",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e
