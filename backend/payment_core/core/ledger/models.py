"""
Ledger models - PaymentTransaction (IMMUTABLE)
"""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, Index
from sqlalchemy.orm import relationship
from payment_core.core.common.base_model import BaseModel


class PaymentTransaction(BaseModel):
    """
    PaymentTransaction model - IMMUTABLE (WRITE-ONCE)

    One row per successful payment, written in the same database
    transaction as the two balance updates. Its existence is equivalent
    to "the payment happened".

    IMMUTABILITY RULES (application-level):
    - NEVER UPDATE a PaymentTransaction
    - NEVER DELETE a PaymentTransaction
    """

    __tablename__ = "payment_transactions"

    from_account_id = Column(Integer, ForeignKey("accounts.id", name="fk_payment_transactions_from_account_id"), nullable=False, index=True)
    to_account_id = Column(Integer, ForeignKey("accounts.id", name="fk_payment_transactions_to_account_id"), nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)

    # Relationships
    from_account = relationship("Account", foreign_keys=[from_account_id], lazy="select")
    to_account = relationship("Account", foreign_keys=[to_account_id], lazy="select")

    __table_args__ = (
        Index("ix_payment_transactions_accounts", "from_account_id", "to_account_id"),
    )
