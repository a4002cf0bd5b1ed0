"""
Request logging middleware - one structured log line and metric sample per request
"""

import logging
import time
from typing import Callable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from payment_core.utils.metrics import record_http_request

logger = logging.getLogger(__name__)


def _route_template(request: Request) -> str:
    # /api/v1/accounts/{account_id} rather than /api/v1/accounts/17
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _level_for(status_code: int, error: Optional[str]) -> int:
    if error or status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every HTTP request once it has been answered.

    Fields: path, route, method, status_code, duration_ms and, for
    authenticated requests, the caller login. The trace_id is added by
    the JSON formatter from the request context.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = 500
        error = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            raise
        finally:
            duration = time.perf_counter() - started
            route = _route_template(request)

            fields = {
                "path": request.url.path,
                "route": route,
                "method": request.method,
                "status_code": status_code,
                "duration_ms": round(duration * 1000, 2),
            }
            caller = getattr(request.state, "caller", None)
            if caller:
                fields["caller"] = caller
            if error:
                fields["error"] = error

            level = _level_for(status_code, error)
            message = "Request completed" if level == logging.INFO else "Request failed"
            logger.log(level, f"{message}: {request.method} {route} -> {status_code}", extra=fields)

            record_http_request(
                path=route,
                method=request.method,
                status_code=status_code,
                duration_seconds=duration,
            )
