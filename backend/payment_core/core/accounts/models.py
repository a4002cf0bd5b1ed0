"""
Account model - Named accounts with a stored balance
"""

from sqlalchemy import Column, String, Numeric, DateTime
from sqlalchemy.sql import func
from payment_core.core.common.base_model import BaseModel


class Account(BaseModel):
    """
    Account model - Shared mutable state

    The balance is stored on the row (fixed-point, scale 2) and is written
    only by the ledger service inside a payment transaction. Overdraft is
    not forbidden: the balance may become negative.
    """

    __tablename__ = "accounts"

    name = Column(String(100), nullable=False)
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    def __repr__(self) -> str:
        return f"<Account id={self.id} name={self.name!r} balance={self.balance}>"
