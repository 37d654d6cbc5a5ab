"""
Invoice reference codec.

Packs the invoices a payment settles into the single order id Midtrans
accepts, and recovers them when the notification comes back:

    [("12", 500), ("13", 250)]  <->  "12-500|13-250"

Ids are not escaped. An invoice id containing "-" or "|" will not survive a
round trip; existing order ids in the wild use this exact format.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from midtrans_gateway.core.exceptions import OrderReferenceTooLong
from midtrans_gateway.schemas.midtrans import InvoiceAllocation

logger = logging.getLogger(__name__)

MAX_ORDER_ID_LENGTH = 50
ALLOCATION_SEPARATOR = "|"
AMOUNT_SEPARATOR = "-"


def encode(allocations: Iterable[InvoiceAllocation]) -> str:
    """
    Serialize allocations into an order id, preserving input order.

    Raises OrderReferenceTooLong if the result does not fit Midtrans'
    order_id field.
    """
    encoded = ALLOCATION_SEPARATOR.join(
        f"{allocation.invoice_id}{AMOUNT_SEPARATOR}{allocation.amount}"
        for allocation in allocations
    )

    if len(encoded) > MAX_ORDER_ID_LENGTH:
        raise OrderReferenceTooLong(
            f"Order reference is {len(encoded)} characters, "
            f"the limit is {MAX_ORDER_ID_LENGTH}",
            details={"length": len(encoded), "limit": MAX_ORDER_ID_LENGTH},
        )

    return encoded


def decode(value: str | None) -> List[InvoiceAllocation]:
    """
    Recover allocations from an order id. Malformed segments are dropped.
    """
    allocations: List[InvoiceAllocation] = []
    if not value:
        return allocations

    for segment in value.split(ALLOCATION_SEPARATOR):
        parts = segment.split(AMOUNT_SEPARATOR, 1)
        if len(parts) != 2:
            continue

        invoice_id, raw_amount = parts
        # Only the plain ASCII digits encode() writes
        if not invoice_id or not (raw_amount.isascii() and raw_amount.isdigit()):
            logger.debug(f"[midtrans] skipping malformed order segment: {segment!r}")
            continue

        allocations.append(InvoiceAllocation(invoice_id=invoice_id, amount=int(raw_amount)))

    return allocations
