"""
Payment audit trail - append-only writes in their own unit of work
"""

import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session, sessionmaker

from payment_core.core.compliance.models import PaymentAuditLog, AuditStatus
from payment_core.infrastructure.logging_config import trace_id_context

logger = logging.getLogger(__name__)


def record_payment_audit(
    session_factory: sessionmaker,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Optional[Decimal],
    attempted_by: Optional[str],
    status: AuditStatus,
    message: Optional[str] = None,
) -> PaymentAuditLog:
    """
    Append one PaymentAuditLog row and commit it immediately.

    The row is written through a fresh session, never the ledger session,
    so it is committed regardless of what happens to the payment
    transaction afterwards (or has already happened to it).

    Errors writing the audit row propagate: an attempt that cannot be
    audited must not be reported as handled.
    """
    db = session_factory()
    try:
        entry = PaymentAuditLog(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            attempted_by=attempted_by,
            status=status,
            message=message,
            trace_id=trace_id_context.get(),
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        db.expunge(entry)
    except Exception:
        db.rollback()
        logger.exception(
            f"Failed to write payment audit row: status={status.value}, "
            f"from_account_id={from_account_id}, to_account_id={to_account_id}"
        )
        raise
    finally:
        db.close()

    logger.debug(
        "Payment audit row written",
        extra={"audit_id": entry.id, "audit_status": status.value, "attempted_by": attempted_by},
    )
    return entry


def list_payment_audit(
    db: Session,
    *,
    status: Optional[AuditStatus] = None,
    account_id: Optional[int] = None,
    limit: int = 100,
) -> List[PaymentAuditLog]:
    """
    List audit rows, newest first.

    account_id matches either side of the attempted payment.
    """
    query = select(PaymentAuditLog)
    if status is not None:
        query = query.where(PaymentAuditLog.status == status)
    if account_id is not None:
        query = query.where(
            or_(
                PaymentAuditLog.from_account_id == account_id,
                PaymentAuditLog.to_account_id == account_id,
            )
        )
    query = query.order_by(PaymentAuditLog.id.desc()).limit(limit)
    return list(db.execute(query).scalars().all())
