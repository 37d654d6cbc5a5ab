"""
Tests for Snap session creation.
"""
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.exceptions import OrderReferenceTooLong, RemoteServiceError
from midtrans_gateway.schemas.midtrans import CustomerDetails, InvoiceAllocation
from midtrans_gateway.services.session_builder import SessionBuilder


CUSTOMER = CustomerDetails(first_name="Budi", last_name="Santoso", email="budi@example.com")


@pytest.fixture
def midtrans():
    service = AsyncMock()
    service.create_transaction = AsyncMock(
        return_value={"token": "tok-1", "redirect_url": "https://app.sandbox.midtrans.com/snap/v2/vtweb/tok-1"}
    )
    return service


async def test_create_session(midtrans, gateway_config):
    allocations = [
        InvoiceAllocation(invoice_id="12", amount=500),
        InvoiceAllocation(invoice_id="13", amount=250),
    ]

    result = await SessionBuilder(midtrans).create_session(
        allocations, Decimal("750"), CUSTOMER, gateway_config
    )

    assert result.order_id == "12-500|13-250"
    assert result.redirect_url == "https://app.sandbox.midtrans.com/snap/v2/vtweb/tok-1"
    assert result.token == "tok-1"

    params, config = midtrans.create_transaction.await_args.args
    assert params == {
        "transaction_details": {"order_id": "12-500|13-250", "gross_amount": 750},
        "customer_details": {
            "first_name": "Budi",
            "last_name": "Santoso",
            "email": "budi@example.com",
        },
    }
    assert config is gateway_config


async def test_fractional_gross_amount(midtrans, gateway_config):
    await SessionBuilder(midtrans).create_session(
        [InvoiceAllocation(invoice_id="12", amount=10)],
        Decimal("10.50"),
        CustomerDetails(),
        gateway_config,
    )
    params, _ = midtrans.create_transaction.await_args.args
    assert params["transaction_details"]["gross_amount"] == 10.5
    assert params["customer_details"] == {}


async def test_3ds_flag_adds_secure_card(midtrans):
    config = GatewayConfig.from_values("M1", "C1", "S1", enable_3ds=True)

    await SessionBuilder(midtrans).create_session(
        [InvoiceAllocation(invoice_id="12", amount=500)], Decimal("500"), CUSTOMER, config
    )

    params, _ = midtrans.create_transaction.await_args.args
    assert params["credit_card"] == {"secure": True}


async def test_too_long_reference_never_calls_midtrans(midtrans, gateway_config):
    # 5 x "12345-12345" joined by "|" = 59 characters
    allocations = [InvoiceAllocation(invoice_id="12345", amount=12345)] * 5

    with pytest.raises(OrderReferenceTooLong):
        await SessionBuilder(midtrans).create_session(
            allocations, Decimal("61725"), CUSTOMER, gateway_config
        )

    midtrans.create_transaction.assert_not_awaited()


async def test_fifty_one_characters_is_rejected(midtrans, gateway_config):
    # "1234567890-1234567890" is 21 chars; two of them plus "|" is 43; "|12-1234" adds 8
    allocations = [
        InvoiceAllocation(invoice_id="1234567890", amount=1234567890),
        InvoiceAllocation(invoice_id="1234567890", amount=1234567890),
        InvoiceAllocation(invoice_id="12", amount=1234),
    ]

    with pytest.raises(OrderReferenceTooLong) as exc:
        await SessionBuilder(midtrans).create_session(
            allocations, Decimal("100"), CUSTOMER, gateway_config
        )

    assert exc.value.details["length"] == 51
    midtrans.create_transaction.assert_not_awaited()


async def test_remote_error_propagates(midtrans, gateway_config):
    midtrans.create_transaction.side_effect = RemoteServiceError("Access denied")

    with pytest.raises(RemoteServiceError) as exc:
        await SessionBuilder(midtrans).create_session(
            [InvoiceAllocation(invoice_id="12", amount=500)], Decimal("500"), CUSTOMER, gateway_config
        )
    assert exc.value.message == "Access denied"
