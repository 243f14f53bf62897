from contextlib import asynccontextmanager
import logging
import os

import httpx
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.staticfiles import StaticFiles

from app.config import get_settings

settings = get_settings()

# Enable logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Paystack checkout starting up...")
    if not settings.PAYSTACK_SECRET_KEY:
        logger.warning("⚠️ PAYSTACK_SECRET_KEY is not set; gateway calls will be rejected")
    app.state.http_client = httpx.AsyncClient(timeout=settings.PAYSTACK_TIMEOUT)
    logger.info("✅ Server is ready to handle requests")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("🛑 Paystack checkout shutting down...")


# Init app
app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

# Static Files
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
STATIC_DIR = os.path.join(BASE_DIR, "static")

if os.path.isdir(STATIC_DIR):
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    logger.info(f"Static files mounted at /static from {STATIC_DIR}")

# Route Registrations
from app.routes import health_router, payment_router

for router in [payment_router, health_router]:
    app.include_router(router)
    logger.info(f"Included router: {router.prefix or '/'}")


@app.exception_handler(404)
async def not_found_exception_handler(request: Request, exc: HTTPException):
    return Response(status_code=404, content=f"Endpoint {request.url.path} not found")


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {exc}", exc_info=exc)
    return Response(status_code=500, content="Internal server error")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )
