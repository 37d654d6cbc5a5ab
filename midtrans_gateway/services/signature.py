"""
Midtrans notification signature verification.

signature_key = SHA512(order_id + status_code + gross_amount + server_key)
"""

import hashlib
import hmac

from midtrans_gateway.schemas.midtrans import NotificationPayload


def expected_signature(
    order_id: str,
    status_code: str,
    gross_amount: str,
    server_key: str,
) -> str:
    raw = f"{order_id}{status_code}{gross_amount}{server_key}"
    return hashlib.sha512(raw.encode("utf-8")).hexdigest()


def verify(payload: NotificationPayload, server_key: str) -> bool:
    """True iff the payload's signature_key was produced with server_key."""
    if not payload.signature_key:
        return False

    expected = expected_signature(
        payload.order_id or "",
        payload.status_code or "",
        payload.gross_amount or "",
        server_key,
    )
    return hmac.compare_digest(
        expected.encode("utf-8"), payload.signature_key.encode("utf-8")
    )
