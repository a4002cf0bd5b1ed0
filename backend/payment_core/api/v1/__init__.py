"""
API v1 routes - Service-facing API
"""

from fastapi import APIRouter
from payment_core.infrastructure.settings import get_settings
from payment_core.api.v1.payments import router as payments_router
from payment_core.api.v1.accounts import router as accounts_router

settings = get_settings()
router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["api-v1"])

router.include_router(payments_router, tags=["payments"])
router.include_router(accounts_router, tags=["accounts"])
