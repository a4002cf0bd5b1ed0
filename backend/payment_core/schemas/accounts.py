"""
Account API response schemas
"""

from pydantic import BaseModel, Field


class AccountResponse(BaseModel):
    """Account response schema"""
    id: int
    name: str
    balance: str = Field(..., description="Current balance (scale 2, may be negative)")
