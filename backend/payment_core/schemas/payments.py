"""
Payment API request/response schemas
"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
    """Payment request schema"""
    from_account_id: int = Field(..., description="Source account id")
    to_account_id: int = Field(..., description="Destination account id")
    amount: Decimal = Field(..., description="Amount to move (2 fractional digits; rounded half-up)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "from_account_id": 1,
                "to_account_id": 2,
                "amount": "300.00",
            }
        }
    )


class PaymentResponse(BaseModel):
    """Payment response schema"""
    transaction_id: int = Field(..., description="PaymentTransaction id")
    from_account_id: int
    to_account_id: int
    amount: str = Field(..., description="Amount moved (scale 2)")
    rows_affected: int = Field(..., description="Rows written by the ledger transaction (informational)")
    message: str = "Payment succeeded"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "transaction_id": 42,
                "from_account_id": 1,
                "to_account_id": 2,
                "amount": "300.00",
                "rows_affected": 3,
                "message": "Payment succeeded",
            }
        }
    )
