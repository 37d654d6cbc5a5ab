import hashlib
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest

from midtrans_gateway.core.config import GatewayConfig

SERVER_KEY = "SECRET"


def sign(order_id: str, status_code: str, gross_amount: str, server_key: str = SERVER_KEY) -> str:
    raw = f"{order_id}{status_code}{gross_amount}{server_key}"
    return hashlib.sha512(raw.encode("utf-8")).hexdigest()


def make_notification(**overrides: Any) -> Dict[str, Any]:
    """A settled Midtrans notification for invoice 12, signed with SERVER_KEY."""
    data: Dict[str, Any] = {
        "transaction_time": "2026-10-19 10:15:02",
        "transaction_status": "settlement",
        "transaction_id": "9aed5972-5b6a-401e-894b-a32c91ed1a3a",
        "status_message": "midtrans payment notification",
        "status_code": "200",
        "payment_type": "bank_transfer",
        "order_id": "12-500",
        "merchant_id": "G141532850",
        "gross_amount": "500.00",
        "fraud_status": "accept",
        "currency": "IDR",
    }
    data.update(overrides)
    if "signature_key" not in overrides:
        data["signature_key"] = sign(
            data["order_id"], data["status_code"], data["gross_amount"]
        )
    return data


class FakeInvoiceDirectory:
    def __init__(self, owners: Optional[Dict[str, str]] = None):
        self.owners = owners or {}
        self.lookups = []

    async def get_client_id(self, invoice_id: str) -> Optional[str]:
        self.lookups.append(invoice_id)
        return self.owners.get(invoice_id)


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig.from_values(
        merchant_id="G141532850",
        client_key="SB-Mid-client-abc",
        server_key=SERVER_KEY,
    )


@pytest.fixture
def invoice_directory() -> FakeInvoiceDirectory:
    return FakeInvoiceDirectory({"12": "client-7", "13": "client-7"})


@pytest.fixture
def audit_sink() -> AsyncMock:
    sink = AsyncMock()
    sink.record = AsyncMock(return_value=None)
    return sink
