"""
Authentication dependencies for FastAPI
"""

from typing import Callable, Optional
from fastapi import Depends, HTTPException, Header, Request, status

from payment_core.auth.caller import Principal, decode_principal
from payment_core.core.security.models import Role
from payment_core.services.exceptions import InvalidCallerTokenError
from payment_core.utils.trace_id import get_trace_id


def _unauthorized(request: Request, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": {
                "code": code,
                "message": message,
                "trace_id": get_trace_id(request),
            }
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Principal:
    """
    Extract the caller Principal from the Bearer token in the Authorization header.

    The login name is also stored on request.state for request logging.
    """
    if not authorization:
        raise _unauthorized(request, "AUTHORIZATION_MISSING", "Authorization header missing")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise _unauthorized(request, "AUTHORIZATION_INVALID", "Invalid authorization header format")

    if scheme.lower() != "bearer":
        raise _unauthorized(request, "AUTHORIZATION_INVALID", "Invalid authentication scheme")

    try:
        principal = decode_principal(token)
    except InvalidCallerTokenError:
        raise _unauthorized(request, "TOKEN_INVALID", "Invalid or expired token")

    request.state.caller = principal.subject
    return principal


def require_roles(*roles: Role) -> Callable:
    """
    Dependency factory: caller must hold at least one of roles.

    Used by the read-only account and admin endpoints. The payment endpoint does not use
    roles; it is guarded by the identity gate inside the procedure.
    """
    async def dependency(
        request: Request,
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        if not principal.has_any_role(*(r.value for r in roles)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": {
                        "code": "FORBIDDEN",
                        "message": f"Requires one of roles: {', '.join(r.value for r in roles)}",
                        "trace_id": get_trace_id(request),
                    }
                },
            )
        return principal

    return dependency
