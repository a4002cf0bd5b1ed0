"""
Global exception handlers
"""

import logging
from decimal import Decimal
from typing import Any, Dict
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from payment_core.services.exceptions import (
    PaymentError,
    PaymentExecutionError,
    PaymentValidationError,
    UnauthorizedPaymentError,
)
from payment_core.utils.trace_id import get_trace_id

logger = logging.getLogger(__name__)

# Most specific first; anything else derived from PaymentError is a 500
PAYMENT_ERROR_STATUS = (
    (UnauthorizedPaymentError, status.HTTP_403_FORBIDDEN),
    (PaymentValidationError, status.HTTP_400_BAD_REQUEST),
    (PaymentExecutionError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def payment_error_status(exc: PaymentError) -> int:
    for error_type, http_status in PAYMENT_ERROR_STATUS:
        if isinstance(exc, error_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def payment_exception_handler(request: Request, exc: PaymentError) -> JSONResponse:
    """
    Handle errors raised by the payment procedure.

    The audit trail has already been written when these reach the API
    layer; the handler only shapes the response. The message is returned
    unchanged so callers see the same text the audit row stores.
    """
    return JSONResponse(
        status_code=payment_error_status(exc),
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "status": exc.status.value,
                "retryable": exc.retryable,
                "trace_id": get_trace_id(request),
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions"""
    trace_id = get_trace_id(request)

    # If detail is already a dict with "error" key, use it directly (preserving custom codes)
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        error_response: Dict[str, Any] = exc.detail.copy()
        if isinstance(error_response["error"], dict) and not error_response["error"].get("trace_id"):
            error_response["error"] = {**error_response["error"], "trace_id": trace_id}
    else:
        error_response = {
            "error": {
                "code": f"HTTP_{exc.status_code}",
                "message": exc.detail if isinstance(exc.detail, str) else str(exc.detail),
                "trace_id": trace_id,
            }
        }

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response,
        headers=getattr(exc, "headers", None),
    )


def _convert_non_serializable(obj):
    """Recursively convert non-JSON-serializable objects to strings"""
    if isinstance(obj, (Decimal, Exception)):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _convert_non_serializable(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_convert_non_serializable(item) for item in obj]
    elif isinstance(obj, type):
        return str(obj)
    return obj


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation exceptions (malformed body, wrong types)"""
    error_response: Dict[str, Any] = {
        "error": {
            "code": "REQUEST_VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": _convert_non_serializable(exc.errors()),
            "trace_id": get_trace_id(request),
        }
    }

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions"""
    trace_id = get_trace_id(request)

    # Log the actual exception, never expose details
    logger.exception("Unhandled exception", exc_info=exc, extra={"trace_id": trace_id})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An internal error occurred",
                "trace_id": trace_id,
            }
        },
    )
