# app/dependencies.py
import os

import httpx
from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from app.config import Settings, get_settings
from app.services.paystack_client import PaystackClient

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared client opened in the app lifespan."""
    return request.app.state.http_client


def get_paystack_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> PaystackClient:
    return PaystackClient(http_client, settings)
