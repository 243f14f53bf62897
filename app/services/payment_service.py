import logging
from dataclasses import dataclass
from typing import Optional, Union

from app.schemas.payment import PaymentRequest
from app.services.paystack_client import GatewayError, PaystackClient

logger = logging.getLogger(__name__)


@dataclass
class RecurringSuccess:
    """Plan created; the page opens the Paystack popup with this plan code."""
    plan_code: str


@dataclass
class RecurringFailure:
    message: str


@dataclass
class OneTimeSuccess:
    """Transaction initialized; the payer is redirected to this URL."""
    authorization_url: str


@dataclass
class OneTimeFailure:
    message: str


PaymentOutcome = Union[RecurringSuccess, RecurringFailure, OneTimeSuccess, OneTimeFailure]


async def process_payment(payment: PaymentRequest, client: PaystackClient) -> PaymentOutcome:
    """Run exactly one gateway call for a validated submission and map the result to an outcome."""
    logger.info(f"Processing payment... recurring={payment.recurring}")

    if payment.recurring:
        logger.info("Recurring payment selected. Creating plan...")
        try:
            plan_code = await client.create_plan(payment)
        except GatewayError as e:
            return RecurringFailure(f"Failed to create subscription plan: {e.message}")
        return RecurringSuccess(plan_code)

    logger.info("One-time payment selected. Initializing transaction...")
    try:
        authorization_url = await client.initialize_transaction(payment)
    except GatewayError as e:
        return OneTimeFailure(f"Payment initialization failed: {e.message}")
    return OneTimeSuccess(authorization_url)


@dataclass
class VerificationResult:
    reference: str
    success: bool
    message: str
    amount: Optional[int] = None
    currency: Optional[str] = None


async def verify_payment(reference: str, client: PaystackClient) -> VerificationResult:
    """Check a transaction reference after Paystack sends the payer back."""
    try:
        result = await client.verify_transaction(reference)
    except GatewayError as e:
        return VerificationResult(reference=reference, success=False, message=f"Verification failed: {e.message}")

    data = result.data
    if data.status != "success":
        logger.warning(f"Transaction {reference} not successful: status={data.status}")
        return VerificationResult(
            reference=reference,
            success=False,
            message=f"Payment was not completed (status: {data.status})",
            amount=data.amount,
            currency=data.currency,
        )

    logger.info(f"✅ Transaction {reference} verified")
    return VerificationResult(
        reference=reference,
        success=True,
        message="Payment received. Thank you!",
        amount=data.amount,
        currency=data.currency,
    )
