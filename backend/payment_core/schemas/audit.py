"""
Payment audit API response schemas
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class PaymentAuditItem(BaseModel):
    """One payment audit row"""
    id: int
    from_account_id: int
    to_account_id: int
    amount: Optional[str] = Field(None, description="Attempted amount (scale 2)")
    attempted_by: Optional[str] = Field(None, description="Caller login name")
    status: str = Field(..., description="Started, Unauthorized, ValidationFailed, Success or Error")
    message: Optional[str] = None
    trace_id: Optional[str] = None
    created_at: str = Field(..., description="ISO 8601 timestamp")


class PaymentAuditListResponse(BaseModel):
    items: List[PaymentAuditItem]
    count: int
