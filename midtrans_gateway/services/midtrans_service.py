"""
Midtrans Payment Gateway Service.

Handles the two external API calls the gateway makes to Midtrans:
creating a Snap transaction (hosted payment page) and querying the
status of an order. Credentials come from the GatewayConfig passed
into each call.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from midtrans_gateway.core.config import GatewayConfig
from midtrans_gateway.core.exceptions import RemoteServiceError

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════
# Constants
# ══════════════════════════════════════════════════════════════════════

SANDBOX_SNAP_URL = "https://app.sandbox.midtrans.com/snap/v1"
PRODUCTION_SNAP_URL = "https://app.midtrans.com/snap/v1"
SANDBOX_API_URL = "https://api.sandbox.midtrans.com/v2"
PRODUCTION_API_URL = "https://api.midtrans.com/v2"


# ══════════════════════════════════════════════════════════════════════
# Pure helper functions
# ══════════════════════════════════════════════════════════════════════


def _resolve_snap_url(config: GatewayConfig) -> str:
    return PRODUCTION_SNAP_URL if config.is_production else SANDBOX_SNAP_URL


def _resolve_api_url(config: GatewayConfig) -> str:
    return PRODUCTION_API_URL if config.is_production else SANDBOX_API_URL


def _auth(config: GatewayConfig) -> httpx.BasicAuth:
    """Midtrans authenticates with the server key as username, no password."""
    return httpx.BasicAuth(config.server_key.get_secret_value(), "")


def _extract_error_message(data: Dict[str, Any], fallback: str) -> str:
    """Pull a human-readable message out of a Midtrans error body."""
    messages: Optional[List[str]] = data.get("error_messages")
    if isinstance(messages, list) and messages:
        return "; ".join(str(m) for m in messages)
    status_message = data.get("status_message")
    if isinstance(status_message, str) and status_message:
        return status_message
    return fallback


def _parse_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


# ══════════════════════════════════════════════════════════════════════
# MidtransService class
# ══════════════════════════════════════════════════════════════════════


class MidtransService:
    """
    Service class that encapsulates the Midtrans Snap and Core API calls.

    """

    JSON_HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    def _client(self, config: GatewayConfig) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=config.timeout,
            auth=_auth(config),
            headers=self.JSON_HEADERS,
            transport=self._transport,
        )

    # ──────────────────────────────────────────────────────────────
    # Snap transaction (create session)
    # ──────────────────────────────────────────────────────────────

    async def create_transaction(
        self, params: Dict[str, Any], config: GatewayConfig
    ) -> Dict[str, Any]:
        """
        POST /snap/v1/transactions and return {token, redirect_url}.
        """
        url = f"{_resolve_snap_url(config)}/transactions"
        order_id = params.get("transaction_details", {}).get("order_id")

        try:
            async with self._client(config) as client:
                resp = await client.post(url, json=params)
        except httpx.HTTPError as e:
            logger.error(f"[midtrans] POST /transactions error: {e}")
            raise RemoteServiceError(
                f"Midtrans session request failed: {e}",
                details={"order_id": order_id},
            ) from e

        data = _parse_json(resp)
        logger.info(
            f"[midtrans] POST /transactions — HTTP {resp.status_code}, order_id={order_id}"
        )

        if resp.status_code >= 400:
            message = _extract_error_message(data, f"HTTP {resp.status_code}")
            logger.error(f"[midtrans] Snap transaction rejected: {message}")
            raise RemoteServiceError(
                message,
                details={"order_id": order_id, "http_status": resp.status_code},
            )

        if not data.get("redirect_url"):
            raise RemoteServiceError(
                "Midtrans response did not include a redirect_url",
                details={"order_id": order_id},
            )

        return data

    # ──────────────────────────────────────────────────────────────
    # Transaction status (query status)
    # ──────────────────────────────────────────────────────────────

    async def get_status(self, order_id: str, config: GatewayConfig) -> Dict[str, Any]:
        """
        GET /v2/{order_id}/status and return the transaction status record.
        """
        url = f"{_resolve_api_url(config)}/{quote(order_id, safe='')}/status"

        try:
            async with self._client(config) as client:
                resp = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"[midtrans] GET /status error: {e}")
            raise RemoteServiceError(
                f"Midtrans status query failed: {e}",
                details={"order_id": order_id},
            ) from e

        data = _parse_json(resp)
        logger.info(
            f"[midtrans] GET /status — HTTP {resp.status_code}, "
            f"order_id={order_id}, status_code={data.get('status_code', 'N/A')}"
        )

        # Core API answers 200 with the real code in the body; an unknown
        # order comes back as status_code 404 without a transaction_status.
        body_status = str(data.get("status_code", resp.status_code))
        if resp.status_code >= 400 or not data.get("transaction_status"):
            message = _extract_error_message(data, f"HTTP {resp.status_code}")
            raise RemoteServiceError(
                message,
                details={"order_id": order_id, "status_code": body_status},
            )

        return data


# Module-level singleton
midtrans_service = MidtransService()
