# app/utils/payment_form.py
import logging
from typing import Dict, Optional

from pydantic import ValidationError

from app.schemas.payment import FlowFieldError, PaymentRequest

logger = logging.getLogger(__name__)

FIELD_MESSAGES = {
    "email": "Enter a valid email address",
    "amount": "Amount must be a whole number greater than zero",
    "name": "Enter a valid name",
    "recurring": "Invalid value for recurring",
}


# same strings pydantic's lax bool parsing reads as True
CHECKBOX_ON = {"1", "on", "t", "true", "y", "yes"}


def checkbox_checked(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in CHECKBOX_ON


class PaymentFormError(Exception):
    """Submitted payment form is incomplete or malformed."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Map pydantic errors onto form field names, first message wins."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        cause = err.get("ctx", {}).get("error")
        if isinstance(cause, FlowFieldError):
            errors.setdefault(cause.field, str(cause))
            continue

        field = str(err["loc"][0]) if err["loc"] else "form"
        if err["type"] == "missing":
            errors.setdefault(field, f"{field.capitalize()} is required")
        else:
            errors.setdefault(field, FIELD_MESSAGES.get(field, err["msg"]))
    return errors


def parse_payment_form(
    email: Optional[str],
    amount: Optional[str],
    name: Optional[str],
    recurring: Optional[str],
) -> PaymentRequest:
    """
    Build a PaymentRequest from raw form strings.
    An unchecked checkbox is simply absent, so a missing `recurring` means one-time.
    """
    data = {"email": email, "name": name, "recurring": recurring or False}
    if amount is not None and amount.strip():
        data["amount"] = amount.strip()

    try:
        return PaymentRequest(**data)
    except ValidationError as e:
        errors = field_errors(e)
        logger.warning(f"Payment form rejected: {errors}")
        raise PaymentFormError(errors) from e
