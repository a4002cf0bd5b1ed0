"""
Utilities for creating caller tokens in tests
"""

import os
import time
import jwt
from typing import Any, Dict, List, Optional


def create_test_jwt(
    subject: str,
    roles: Optional[List[str]] = None,
    expires_in: int = 3600,
    secret: Optional[str] = None,
    additional_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a signed HS256 caller token.

    Args:
        subject: Login name ('sub' claim)
        roles: Role strings ('roles' claim)
        expires_in: Token expiration in seconds; negative for an expired token
        secret: Signing secret (default: JWT_SECRET from the test environment)
        additional_claims: Additional claims to include in token

    Returns:
        JWT token string
    """
    now = int(time.time())
    claims: Dict[str, Any] = {
        "sub": subject,
        "iat": now,
        "exp": now + expires_in,
    }
    if roles:
        claims["roles"] = roles
    if additional_claims:
        claims.update(additional_claims)

    return jwt.encode(
        claims,
        secret or os.environ["JWT_SECRET"],
        algorithm="HS256",
    )
