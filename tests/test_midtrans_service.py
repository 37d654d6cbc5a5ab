"""
Tests for the Midtrans API client (Snap transactions and status queries).

All HTTP goes through httpx.MockTransport; nothing leaves the process.
"""
import base64
import json

import httpx
import pytest

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.exceptions import RemoteServiceError
from midtrans_gateway.services.midtrans_service import MidtransService


SNAP_PARAMS = {
    "transaction_details": {"order_id": "12-500", "gross_amount": 500},
    "customer_details": {"first_name": "Budi", "last_name": "Santoso"},
}


def _service(handler) -> MidtransService:
    return MidtransService(transport=httpx.MockTransport(handler))


class TestCreateTransaction:

    async def test_posts_to_sandbox_snap(self, gateway_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                201,
                json={
                    "token": "66e4fa55-fdac-4ef9-91b5-733b97d1b862",
                    "redirect_url": "https://app.sandbox.midtrans.com/snap/v2/vtweb/66e4fa55",
                },
            )

        result = await _service(handler).create_transaction(SNAP_PARAMS, gateway_config)

        assert result["redirect_url"].startswith("https://app.sandbox.midtrans.com/")
        assert seen["url"] == "https://app.sandbox.midtrans.com/snap/v1/transactions"
        assert seen["body"] == SNAP_PARAMS
        expected_auth = base64.b64encode(b"SECRET:").decode()
        assert seen["auth"] == f"Basic {expected_auth}"

    async def test_production_url(self):
        config = GatewayConfig.from_values("M1", "C1", "S1", is_production=True)

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.host == "app.midtrans.com"
            return httpx.Response(201, json={"token": "t", "redirect_url": "https://x"})

        await _service(handler).create_transaction(SNAP_PARAMS, config)

    async def test_error_messages_surface(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error_messages": ["transaction_details.gross_amount is not equal to the sum of item_details"]},
            )

        with pytest.raises(RemoteServiceError) as exc:
            await _service(handler).create_transaction(SNAP_PARAMS, gateway_config)

        assert "gross_amount is not equal" in exc.value.message
        assert exc.value.status_code == 502
        assert exc.value.details["http_status"] == 400

    async def test_transport_error_is_remote_error(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(RemoteServiceError):
            await _service(handler).create_transaction(SNAP_PARAMS, gateway_config)

    async def test_missing_redirect_url(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"token": "t"})

        with pytest.raises(RemoteServiceError):
            await _service(handler).create_transaction(SNAP_PARAMS, gateway_config)


class TestGetStatus:

    async def test_returns_status_record(self, gateway_config):
        record = {
            "status_code": "200",
            "transaction_status": "settlement",
            "order_id": "12-500|13-250",
            "gross_amount": "750.00",
        }

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/v2/12-500|13-250/status"
            assert request.url.host == "api.sandbox.midtrans.com"
            return httpx.Response(200, json=record)

        assert await _service(handler).get_status("12-500|13-250", gateway_config) == record

    async def test_expired_order_is_not_an_error(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"status_code": "407", "transaction_status": "expire", "order_id": "12-500"},
            )

        result = await _service(handler).get_status("12-500", gateway_config)
        assert result["transaction_status"] == "expire"

    async def test_unknown_order(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"status_code": "404", "status_message": "Transaction doesn't exist."},
            )

        with pytest.raises(RemoteServiceError) as exc:
            await _service(handler).get_status("12-500", gateway_config)
        assert exc.value.message == "Transaction doesn't exist."
        assert exc.value.details["status_code"] == "404"

    async def test_non_json_body(self, gateway_config):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="<html>maintenance</html>")

        with pytest.raises(RemoteServiceError):
            await _service(handler).get_status("12-500", gateway_config)
