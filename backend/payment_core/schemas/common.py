"""
Health and readiness response schemas
"""

from typing import List
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness: the process is up"""
    status: str
    service: str = "payment-core"


class ReadyResponse(BaseModel):
    """Readiness: the database answers and the payment tables exist"""
    status: str = Field(..., description="ok or not_ready")
    database: str = Field(..., description="connected, or the connection error")
    missing_tables: List[str] = Field(default_factory=list)
