"""
Security models - Roles enum
"""

import enum


class Role(str, enum.Enum):
    """RBAC roles carried in caller tokens"""
    ADMIN = "ADMIN"
    COMPLIANCE = "COMPLIANCE"
    OPS = "OPS"
    SERVICE = "SERVICE"
