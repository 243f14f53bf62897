# Import all routes
from .payment import router as payment_router
from .health import router as health_router

# All routers that should be included in main app
__all__ = [
    "payment_router",
    "health_router",
]
