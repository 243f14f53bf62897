# app/schemas/__init__.py
from .payment import (
    FlowFieldError,
    PaymentRequest,
    PlanResponse,
    TransactionInitResponse,
    TransactionVerifyResponse,
)

__all__ = [
    "FlowFieldError",
    "PaymentRequest",
    "PlanResponse",
    "TransactionInitResponse",
    "TransactionVerifyResponse",
]
