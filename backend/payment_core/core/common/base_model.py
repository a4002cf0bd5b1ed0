"""
Base model with common fields
"""

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.sql import func
from payment_core.infrastructure.database import Base


class BaseModel(Base):
    """
    Base model with common fields

    All models inherit from this base class and get:
    - id: integer primary key
    - created_at: Timezone-aware timestamp (server default)

    Mutable models (Account) add their own updated_at. Append-only
    records (PaymentTransaction, PaymentAuditLog) have none.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
