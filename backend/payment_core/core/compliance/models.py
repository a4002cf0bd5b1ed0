"""
PaymentAuditLog model - Audit trail of every payment attempt
"""

import enum
from sqlalchemy import Column, Integer, String, Numeric, Text, Enum as SQLEnum, Index
from payment_core.core.common.base_model import BaseModel


class AuditStatus(str, enum.Enum):
    """Decision point reached by a payment attempt"""
    STARTED = "Started"
    UNAUTHORIZED = "Unauthorized"
    VALIDATION_FAILED = "ValidationFailed"
    SUCCESS = "Success"
    ERROR = "Error"


class PaymentAuditLog(BaseModel):
    """
    PaymentAuditLog model - APPEND-ONLY

    Each call to the payment procedure writes one STARTED row on entry and
    exactly one terminal row (UNAUTHORIZED, VALIDATION_FAILED, SUCCESS or
    ERROR). Rows are committed in their own unit of work so they outlive a
    rolled-back payment. Rows are never updated or deleted.

    No foreign keys to accounts: attempts against unknown account ids are
    audited too.
    """

    __tablename__ = "payment_audit_logs"

    from_account_id = Column(Integer, nullable=False, index=True)
    to_account_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=True)  # NULL only for non-finite input
    attempted_by = Column(String(128), nullable=True, index=True)  # Caller login name
    status = Column(
        SQLEnum(
            AuditStatus,
            name="payment_audit_status",
            create_constraint=True,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        index=True,
    )
    message = Column(Text, nullable=True)  # Rejection reason or failure message (verbatim)
    trace_id = Column(String(64), nullable=True, index=True)

    __table_args__ = (
        Index("ix_payment_audit_logs_accounts", "from_account_id", "to_account_id"),
    )
