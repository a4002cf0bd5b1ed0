"""
FastAPI application entry point
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from payment_core.infrastructure.settings import get_settings
from payment_core.infrastructure.logging_config import setup_logging
from payment_core.services.exceptions import PaymentError
from payment_core.api.exceptions import (
    http_exception_handler,
    payment_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from payment_core.api.public.health import router as health_router
from payment_core.api.public.metrics import router as metrics_router
from payment_core.api.v1 import router as api_v1_router
from payment_core.api.admin import router as admin_router
from payment_core.utils.trace_id import TraceIDMiddleware
from payment_core.utils.request_logging import RequestLoggingMiddleware

settings = get_settings()

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Payment Core API",
    description="Atomic funds transfer between accounts with a full audit trail",
    version="1.0.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url="/openapi.json",
)

# Last added is outermost: TraceID wraps request logging so logs carry the trace_id
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(TraceIDMiddleware)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PaymentError, payment_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(api_v1_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "Payment Core API",
        "version": "1.0.0",
        "status": "running",
    }
