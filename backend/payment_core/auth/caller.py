"""
Caller identity - Principal decoded from a service bearer token
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import jwt
from jwt.exceptions import InvalidTokenError

from payment_core.infrastructure.settings import Settings, get_settings
from payment_core.services.exceptions import InvalidCallerTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller.

    subject is the login name the caller authenticated as. It is read by
    the identity gate and never set by the payment procedure.
    """
    subject: Optional[str]
    roles: List[str] = field(default_factory=list)
    raw_claims: Dict[str, Any] = field(default_factory=dict)

    def has_any_role(self, *roles: str) -> bool:
        wanted = {str(r).upper() for r in roles}
        return any(str(r).upper() in wanted for r in self.roles)


def decode_principal(token: str, settings: Optional[Settings] = None) -> Principal:
    """
    Decode and verify a bearer token into a Principal.

    Claims used:
    - sub: login name
    - roles: list of role strings (optional)

    Raises:
        InvalidCallerTokenError: bad signature, expired, malformed, or no sub
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub"]},
        )
    except InvalidTokenError as e:
        logger.info(f"Rejected caller token: {type(e).__name__}: {e}")
        raise InvalidCallerTokenError(str(e)) from e

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    return Principal(
        subject=payload["sub"],
        roles=[str(r) for r in roles],
        raw_claims=payload,
    )
