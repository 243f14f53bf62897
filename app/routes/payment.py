# app/routes/payment.py
import logging
import re
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from app.config import Settings, get_settings
from app.dependencies import get_paystack_client, templates
from app.services.payment_service import (
    OneTimeFailure,
    OneTimeSuccess,
    RecurringFailure,
    RecurringSuccess,
    process_payment,
    verify_payment,
)
from app.services.paystack_client import PaystackClient
from app.utils.payment_form import PaymentFormError, checkbox_checked, parse_payment_form

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payment"])

# letters, digits, "_", "." and "-", with at least one letter or digit
REFERENCE_PATTERN = re.compile(r"(?=.*[A-Za-z0-9])[A-Za-z0-9_.-]+")


def render_form(
    request: Request,
    settings: Settings,
    form: Optional[Dict[str, str]] = None,
    errors: Optional[Dict[str, str]] = None,
    error_message: Optional[str] = None,
    plan_code: Optional[str] = None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "public_key": settings.PAYSTACK_PUBLIC_KEY,
            "currency": settings.PAYSTACK_CURRENCY,
            "form": form or {},
            "errors": errors or {},
            "error_message": error_message,
            "plan_code": plan_code,
        },
        status_code=status_code,
    )


@router.get("/", include_in_schema=False)
async def payment_form(request: Request, settings: Settings = Depends(get_settings)):
    return render_form(request, settings)


@router.post("/", include_in_schema=False)
async def create_payment(
    request: Request,
    email: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    recurring: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
    client: PaystackClient = Depends(get_paystack_client),
):
    submitted = {
        "email": email or "",
        "amount": amount or "",
        "name": name or "",
        "recurring": checkbox_checked(recurring),
    }

    try:
        payment = parse_payment_form(email, amount, name, recurring)
    except PaymentFormError as e:
        logger.warning("Model state is invalid.")
        return render_form(request, settings, form=submitted, errors=e.errors, status_code=422)

    submitted["recurring"] = payment.recurring

    outcome = await process_payment(payment, client)

    if isinstance(outcome, OneTimeSuccess):
        logger.info(f"➡️ Redirecting payer to {outcome.authorization_url}")
        return RedirectResponse(outcome.authorization_url, status_code=303)

    if isinstance(outcome, RecurringSuccess):
        return render_form(request, settings, form=submitted, plan_code=outcome.plan_code)

    if isinstance(outcome, (RecurringFailure, OneTimeFailure)):
        return render_form(request, settings, form=submitted, error_message=outcome.message)

    raise TypeError(f"Unhandled payment outcome: {outcome!r}")


@router.get("/payment/callback", include_in_schema=False)
async def payment_callback(
    request: Request,
    reference: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: PaystackClient = Depends(get_paystack_client),
):
    reference = (reference or "").strip()
    error_message = None
    if not reference:
        error_message = "Missing transaction reference"
    elif not REFERENCE_PATTERN.fullmatch(reference):
        logger.warning(f"Rejected malformed transaction reference: {reference!r}")
        error_message = "Invalid transaction reference"

    if error_message:
        return templates.TemplateResponse(
            request,
            "callback.html",
            {"app_name": settings.APP_NAME, "result": None, "error_message": error_message},
            status_code=400,
        )

    result = await verify_payment(reference, client)
    return templates.TemplateResponse(
        request,
        "callback.html",
        {"app_name": settings.APP_NAME, "result": result, "error_message": None},
    )
