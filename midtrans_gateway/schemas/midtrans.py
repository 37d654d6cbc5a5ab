"""
Pydantic models for the Midtrans gateway routes and the reconciliation core.
"""

from __future__ import annotations

import enum
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionStatus(str, enum.Enum):
    """Canonical transaction statuses of the billing platform."""

    APPROVED = "approved"
    DECLINED = "declined"
    VOID = "void"
    PENDING = "pending"
    RECONCILED = "reconciled"
    REFUNDED = "refunded"
    RETURNED = "returned"


# ──────────────────────────────────────────────────────────────────────
#  Order reference
# ──────────────────────────────────────────────────────────────────────


class InvoiceAllocation(BaseModel):
    """One invoice and the whole-unit amount applied to it."""

    model_config = ConfigDict(frozen=True)

    invoice_id: str
    amount: int = Field(..., ge=0)

    @field_validator("invoice_id", mode="before")
    @classmethod
    def coerce_invoice_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def truncate_amount(cls, v: Any) -> int:
        if isinstance(v, bool):
            raise ValueError("amount must be a number")
        if isinstance(v, (float, str)):
            try:
                v = Decimal(str(v))
            except InvalidOperation:
                raise ValueError("amount must be a number")
        if isinstance(v, Decimal):
            if not v.is_finite():
                raise ValueError("amount must be finite")
            return int(v.to_integral_value(rounding=ROUND_DOWN))
        return v


# ──────────────────────────────────────────────────────────────────────
#  Session – POST /api/v1/midtrans/session
# ──────────────────────────────────────────────────────────────────────


def _json_amount(amount: Decimal) -> int | float:
    """Midtrans takes gross_amount as a JSON number; whole amounts go as ints."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


class CustomerDetails(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class PaymentSession(BaseModel):
    """The transaction sent to Midtrans Snap. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    gross_amount: Decimal
    customer: CustomerDetails

    def to_snap_params(self) -> dict[str, Any]:
        return {
            "transaction_details": {
                "order_id": self.order_id,
                "gross_amount": _json_amount(self.gross_amount),
            },
            "customer_details": self.customer.model_dump(exclude_none=True),
        }


class SessionRequest(BaseModel):
    """Request body for creating a Snap payment session."""

    invoices: List[InvoiceAllocation] = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    customer: CustomerDetails = Field(default_factory=CustomerDetails)


class SessionResponse(BaseModel):
    order_id: str
    redirect_url: str
    token: Optional[str] = None


# ──────────────────────────────────────────────────────────────────────
#  Notification – POST /api/v1/midtrans/notification
# ──────────────────────────────────────────────────────────────────────


class NotificationPayload(BaseModel):
    """
    Inbound Midtrans HTTP notification, also the shape of a status query
    response. Midtrans sends more fields than listed here; they are kept.
    """

    model_config = ConfigDict(extra="allow")

    transaction_status: Optional[str] = None
    payment_type: Optional[str] = None
    status_code: Optional[str] = None
    order_id: Optional[str] = None
    fraud_status: Optional[str] = None
    currency: Optional[str] = None
    gross_amount: Optional[str] = None
    transaction_id: Optional[str] = None
    signature_key: Optional[str] = None

    @field_validator("status_code", "gross_amount", "order_id", "transaction_id", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Any:
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v


class CanonicalTransaction(BaseModel):
    """The transaction record handed back to the billing platform."""

    client_id: str
    amount: Decimal
    currency: Optional[str] = None
    status: TransactionStatus
    reference_id: Optional[str] = None
    transaction_id: Optional[str] = None
    parent_transaction_id: Optional[str] = None
    invoices: List[InvoiceAllocation] = []


class NotificationAck(BaseModel):
    """Acknowledgment body returned to Midtrans."""

    success: Optional[bool] = None
    error: Optional[bool] = None
    message: str
    transaction: Optional[CanonicalTransaction] = None


class NotificationResult(BaseModel):
    ack: NotificationAck
    transaction: CanonicalTransaction


# ──────────────────────────────────────────────────────────────────────
#  Capture / Void / Refund – declared, unsupported
# ──────────────────────────────────────────────────────────────────────


class CaptureRequest(BaseModel):
    reference_id: Optional[str] = None
    transaction_id: str
    amount: Optional[Decimal] = None


class VoidRequest(BaseModel):
    reference_id: Optional[str] = None
    transaction_id: str
    notes: Optional[str] = None


class RefundRequest(BaseModel):
    reference_id: Optional[str] = None
    transaction_id: str
    amount: Decimal
    notes: Optional[str] = None


class ErrorResponse(BaseModel):
    error: bool = True
    error_code: str
    message: str
    details: Optional[dict[str, Any]] = None
