"""
Maps Midtrans transaction/fraud status onto canonical transaction statuses.

  capture (credit_card, fraud=challenge)  → declined
  capture (credit_card, otherwise)        → approved
  settlement                              → approved
  pending                                 → pending
  deny                                    → declined
  expire / cancel                         → void
"""

from typing import Dict, Optional

from midtrans_gateway.core.exceptions import UnknownTransactionStatus
from midtrans_gateway.schemas.midtrans import TransactionStatus

CREDIT_CARD = "credit_card"
FRAUD_CHALLENGE = "challenge"

STATUS_MAP: Dict[str, TransactionStatus] = {
    "settlement": TransactionStatus.APPROVED,
    "pending": TransactionStatus.PENDING,
    "deny": TransactionStatus.DECLINED,
    "expire": TransactionStatus.VOID,
    "cancel": TransactionStatus.VOID,
}


def map_status(
    transaction_status: Optional[str],
    payment_type: Optional[str] = None,
    fraud_status: Optional[str] = None,
) -> TransactionStatus:
    if transaction_status == "capture" and payment_type == CREDIT_CARD:
        # Challenged by FDS; the merchant has not accepted it yet
        if fraud_status == FRAUD_CHALLENGE:
            return TransactionStatus.DECLINED
        return TransactionStatus.APPROVED

    if transaction_status in STATUS_MAP:
        return STATUS_MAP[transaction_status]

    raise UnknownTransactionStatus(
        f"Unmapped Midtrans transaction status: {transaction_status!r}",
        details={
            "transaction_status": transaction_status,
            "payment_type": payment_type,
            "fraud_status": fraud_status,
        },
    )
