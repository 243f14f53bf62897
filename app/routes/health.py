# app/routes/health.py
import datetime
import logging
import sys

import psutil
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/health",
    tags=["Health Check"]
)


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Liveness plus a quick look at gateway configuration.
    Never includes the key values themselves.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.datetime.now().isoformat(),
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "payment_gateway": {
            "base_url": settings.PAYSTACK_BASE_URL,
            "public_key_configured": bool(settings.PAYSTACK_PUBLIC_KEY),
            "secret_key_configured": bool(settings.PAYSTACK_SECRET_KEY),
        },
    }

    if not settings.PAYSTACK_SECRET_KEY:
        health_status["status"] = "degraded"

    try:
        process = psutil.Process()
        health_status["system"] = {
            "python_version": sys.version,
            "platform": sys.platform,
            "memory_percent": psutil.virtual_memory().percent,
            "process_rss_mb": round(process.memory_info().rss / (1024 ** 2), 2),
        }
    except psutil.Error as e:
        logger.warning(f"Could not read process stats: {e}")
        health_status["system"] = "N/A"

    logger.info(f"Health check completed: {health_status['status']}")

    return JSONResponse(
        content=health_status,
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "X-Health-Check": "true"
        }
    )
