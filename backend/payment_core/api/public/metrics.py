"""
Prometheus metrics endpoint
"""

import logging
from typing import Optional
from fastapi import APIRouter, Request, HTTPException, status, Header, Depends
from fastapi.responses import Response

from payment_core.auth.caller import decode_principal
from payment_core.core.security.models import Role
from payment_core.infrastructure.settings import get_settings
from payment_core.services.exceptions import InvalidCallerTokenError
from payment_core.utils.metrics import get_metrics_output, CONTENT_TYPE_LATEST

logger = logging.getLogger(__name__)

router = APIRouter()


async def verify_metrics_access(
    request: Request,
    x_metrics_token: Optional[str] = Header(None, alias="X-Metrics-Token"),
) -> bool:
    """
    Verify access to metrics endpoint.

    Access is granted if:
    - METRICS_PUBLIC=true, OR
    - METRICS_TOKEN is set and matches X-Metrics-Token header, OR
    - Caller bearer token carries the ADMIN or OPS role

    Returns True if access is granted, raises HTTPException otherwise.
    """
    settings = get_settings()

    if settings.METRICS_PUBLIC:
        return True

    if settings.METRICS_TOKEN and x_metrics_token == settings.METRICS_TOKEN:
        return True

    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        try:
            principal = decode_principal(authorization.split(" ", 1)[1])
        except InvalidCallerTokenError:
            principal = None
        if principal and principal.has_any_role(Role.ADMIN.value, Role.OPS.value):
            return True

    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Access to metrics endpoint denied. Set METRICS_PUBLIC=true or provide valid METRICS_TOKEN or ADMIN/OPS role.",
    )


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    description="Expose Prometheus metrics for observability. Protected by default (METRICS_PUBLIC=false).",
)
async def get_metrics(
    _: bool = Depends(verify_metrics_access),
) -> Response:
    """Prometheus metrics in exposition format"""
    return Response(
        content=get_metrics_output(),
        media_type=CONTENT_TYPE_LATEST,
    )
