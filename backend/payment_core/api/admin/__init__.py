"""
Admin API routes - INTERNAL ONLY
"""

from fastapi import APIRouter
from payment_core.infrastructure.settings import get_settings
from payment_core.api.admin.payment_audit import router as payment_audit_router

settings = get_settings()
router = APIRouter(prefix=settings.ADMIN_V1_PREFIX, tags=["admin-v1"])

router.include_router(payment_audit_router, tags=["admin-payment-audit"])
