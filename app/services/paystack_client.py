# app/services/paystack_client.py
import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.schemas.payment import (
    PaymentRequest,
    PaystackEnvelope,
    PlanResponse,
    TransactionInitResponse,
    TransactionVerifyResponse,
)

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=PaystackEnvelope)


class GatewayError(Exception):
    """Paystack refused the request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class ParseError(GatewayError):
    """Paystack answered with a success status but an unexpected body."""


def extract_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or f"HTTP {response.status_code}"


class PaystackClient:
    """
    Thin wrapper over the Paystack REST API.
    One call per method, no retries. Every call carries the bearer secret key.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http = http_client
        self.settings = settings
        self.base_url = settings.PAYSTACK_BASE_URL.rstrip("/")

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.PAYSTACK_SECRET_KEY}",
            "Content-Type": "application/json",
        }

    def build_plan_payload(self, payment: PaymentRequest) -> Dict[str, Any]:
        return {
            "name": f"{payment.name} Subscription Plan",
            "amount": payment.amount_in_subunits,
            "interval": self.settings.PAYSTACK_PLAN_INTERVAL,
            "currency": self.settings.PAYSTACK_CURRENCY,
        }

    def build_transaction_payload(self, payment: PaymentRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "email": payment.email,
            "amount": payment.amount_in_subunits,
            "metadata": {"name": payment.name},
        }
        if self.settings.PAYSTACK_CALLBACK_URL:
            payload["callback_url"] = self.settings.PAYSTACK_CALLBACK_URL
        return payload

    async def create_plan(self, payment: PaymentRequest) -> str:
        """Create a subscription plan and return its plan code."""
        payload = self.build_plan_payload(payment)
        logger.info(f"[Paystack] Creating plan '{payload['name']}' for {payload['amount']} {payload['currency']}")
        result = await self._send("POST", "/plan", PlanResponse, json=payload)
        logger.info(f"[Paystack] Plan created: {result.data.plan_code}")
        return result.data.plan_code

    async def initialize_transaction(self, payment: PaymentRequest) -> str:
        """Initialize a one-time transaction and return the checkout URL."""
        payload = self.build_transaction_payload(payment)
        logger.info(f"[Paystack] Initializing transaction for {payload['email']} ({payload['amount']})")
        result = await self._send("POST", "/transaction/initialize", TransactionInitResponse, json=payload)
        logger.info(f"[Paystack] Transaction initialized, reference={result.data.reference}")
        return result.data.authorization_url

    async def verify_transaction(self, reference: str) -> TransactionVerifyResponse:
        # a dot-only segment would still be resolved as a path step after quoting
        if not reference or not reference.strip("."):
            raise GatewayError(f"Invalid transaction reference: {reference!r}")
        logger.info(f"[Paystack] Verifying transaction {reference}")
        path = f"/transaction/verify/{quote(reference, safe='')}"
        return await self._send("GET", path, TransactionVerifyResponse)

    async def _send(self, method: str, path: str, shape: Type[ResponseT], json: Optional[Dict[str, Any]] = None) -> ResponseT:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http.request(
                method, url, json=json, headers=self.headers, timeout=self.settings.PAYSTACK_TIMEOUT
            )
        except httpx.RequestError as e:
            logger.error(f"[Paystack] Request error on {method} {path}: {e}")
            raise GatewayError(f"Could not reach the payment gateway: {e}") from e

        if not response.is_success:
            logger.error(
                f"[Paystack] {method} {path} failed. Status Code: {response.status_code}. Error: {response.text}"
            )
            raise GatewayError(extract_error_message(response), response.status_code, response.text)

        try:
            result = shape.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"[Paystack] Unexpected response from {method} {path}: {response.text} ({e})")
            raise ParseError(
                "Unexpected response from the payment gateway", response.status_code, response.text
            ) from e

        if result.status is False:
            logger.error(f"[Paystack] {method} {path} returned status=false: {response.text}")
            raise GatewayError(result.message or "Request was not successful", response.status_code, response.text)

        return result
