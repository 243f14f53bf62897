# app/schemas/payment.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, PositiveInt, field_validator, model_validator


class FlowFieldError(ValueError):
    """A required field is blank once surrounding whitespace is stripped."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class PaymentRequest(BaseModel):
    """Form submission for a one-time charge or a recurring subscription."""

    email: Optional[EmailStr] = None
    amount: PositiveInt
    name: Optional[str] = None
    recurring: bool = False

    @field_validator("email", "name", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def check_flow_fields(self):
        # the subscription popup also needs an email to open checkout
        if not self.email:
            raise FlowFieldError("email", "Email is required")
        if self.recurring and not self.name:
            raise FlowFieldError("name", "Name is required for a subscription")
        return self

    @property
    def amount_in_subunits(self) -> int:
        return self.amount * 100


# === Paystack response shapes ===

class PaystackEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[bool] = None
    message: Optional[str] = None


class PlanData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    plan_code: str
    name: Optional[str] = None
    amount: Optional[int] = None
    interval: Optional[str] = None

    @field_validator("plan_code")
    @classmethod
    def not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("plan_code is empty")
        return value


class PlanResponse(PaystackEnvelope):
    data: PlanData


class TransactionInitData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    authorization_url: str
    access_code: Optional[str] = None
    reference: Optional[str] = None

    @field_validator("authorization_url")
    @classmethod
    def not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("authorization_url is empty")
        return value


class TransactionInitResponse(PaystackEnvelope):
    data: TransactionInitData


class TransactionVerifyData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str
    reference: str
    amount: int
    currency: Optional[str] = None
    paid_at: Optional[str] = None


class TransactionVerifyResponse(PaystackEnvelope):
    data: TransactionVerifyData
