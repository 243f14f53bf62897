from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # === PAYMENT GATEWAY ===
    PAYSTACK_PUBLIC_KEY: str = Field(default="", description="Paystack public key, exposed to the checkout popup")
    PAYSTACK_SECRET_KEY: str = Field(default="", description="Paystack secret key, sent as the bearer credential")
    PAYSTACK_BASE_URL: str = Field(default="https://api.paystack.co", description="Paystack API base URL")
    PAYSTACK_CURRENCY: str = Field(default="ZAR", description="Currency for subscription plans")
    PAYSTACK_PLAN_INTERVAL: str = Field(default="monthly", description="Billing interval for subscription plans")
    PAYSTACK_CALLBACK_URL: Optional[str] = Field(default=None, description="Where Paystack sends the payer after checkout")
    PAYSTACK_TIMEOUT: float = Field(default=15.0, description="Timeout in seconds for gateway calls")

    # === APP ===
    APP_NAME: str = Field(default="Paystack Checkout", description="Title shown on rendered pages")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # === DEBUG MODE ===
    DEBUG: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    return Settings()
