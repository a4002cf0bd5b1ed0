"""
Payment procedure - Identity gate, validation, ledger transaction and audit trail
"""

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple
from sqlalchemy.orm import sessionmaker

from payment_core.auth.caller import Principal
from payment_core.auth.identity_gate import authorize_caller
from payment_core.core.compliance.models import AuditStatus
from payment_core.infrastructure.settings import Settings, get_settings
from payment_core.services.audit_service import record_payment_audit
from payment_core.services.exceptions import (
    PaymentExecutionError,
    PaymentValidationError,
    UnauthorizedPaymentError,
)
from payment_core.services.ledger_service import apply_payment
from payment_core.services.validation import normalize_amount, validate_payment_request
from payment_core.utils.metrics import record_payment_attempt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentResult:
    """Committed payment"""
    transaction_id: int
    from_account_id: int
    to_account_id: int
    amount: Decimal
    rows_affected: int


def process_payment(
    *,
    session_factory: sessionmaker,
    principal: Optional[Principal],
    from_account_id: int,
    to_account_id: int,
    amount: Any,
    settings: Optional[Settings] = None,
) -> PaymentResult:
    """
    Move amount from one account to another on behalf of principal.

    Flow (one audit row per decision point, each in its own commit):
    1. Audit STARTED (always)
    2. Identity gate -> audit UNAUTHORIZED, raise UnauthorizedPaymentError
    3. Validation -> audit VALIDATION_FAILED, raise PaymentValidationError
    4. Ledger transaction (debit, credit, PaymentTransaction)
       - commit -> audit SUCCESS, return PaymentResult (if that audit
         write fails, the committed transaction id is logged at CRITICAL
         and the audit error propagates)
       - any failure -> rollback, audit ERROR with the failure message,
         raise PaymentExecutionError carrying the same message

    The amount is normalized to scale 2 before anything is written, so
    every audit row of an attempt carries the same value.

    Nothing is retried here: deadlocks and serialization failures are
    reported as ERROR and the caller decides whether to try again.
    """
    settings = settings or get_settings()
    started_at = time.perf_counter()
    normalized_amount = normalize_amount(amount)
    attempted_by = principal.subject if principal is not None else None

    def audit(status: AuditStatus, message: Optional[str] = None) -> None:
        record_payment_audit(
            session_factory,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=normalized_amount,
            attempted_by=attempted_by,
            status=status,
            message=message,
        )

    def finish(status: AuditStatus) -> None:
        record_payment_attempt(status.value, time.perf_counter() - started_at)

    log_extra = {
        "from_account_id": from_account_id,
        "to_account_id": to_account_id,
        "amount": str(normalized_amount),
        "attempted_by": attempted_by,
    }

    audit(AuditStatus.STARTED)

    try:
        authorize_caller(principal, settings)
    except UnauthorizedPaymentError as e:
        audit(AuditStatus.UNAUTHORIZED, e.message)
        finish(AuditStatus.UNAUTHORIZED)
        raise

    def fail(error: Exception) -> PaymentExecutionError:
        message = str(error) or type(error).__name__
        logger.error(
            f"Payment failed: {type(error).__name__}: {message}",
            extra={**log_extra, "error_type": type(error).__name__},
        )
        audit(AuditStatus.ERROR, message)
        finish(AuditStatus.ERROR)
        return PaymentExecutionError(message)

    try:
        _run_validation(
            session_factory,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=normalized_amount,
        )
    except PaymentValidationError as e:
        logger.warning(f"Payment rejected: {e.message}", extra=log_extra)
        audit(AuditStatus.VALIDATION_FAILED, e.message)
        finish(AuditStatus.VALIDATION_FAILED)
        raise
    except Exception as e:
        # Storage fault while reading accounts
        raise fail(e) from e

    try:
        transaction_id, rows_affected = _run_ledger_transaction(
            session_factory,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=normalized_amount,
            isolation_level=settings.payment_isolation_level,
        )
    except Exception as e:
        raise fail(e) from e

    committed_extra = {
        **log_extra,
        "payment_transaction_id": transaction_id,
        "rows_affected": rows_affected,
    }

    # The money has moved: a failure here must not be mistaken for a rollback
    try:
        audit(AuditStatus.SUCCESS)
    except Exception:
        logger.critical(
            f"Payment {transaction_id} committed but its Success audit row was not written",
            extra=committed_extra,
        )
        raise
    finally:
        finish(AuditStatus.SUCCESS)

    logger.info("Payment succeeded", extra=committed_extra)

    return PaymentResult(
        transaction_id=transaction_id,
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        amount=normalized_amount,
        rows_affected=rows_affected,
    )


def _run_validation(
    session_factory: sessionmaker,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Optional[Decimal],
) -> None:
    db = session_factory()
    try:
        validate_payment_request(
            db,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
        )
    finally:
        db.close()


def _run_ledger_transaction(
    session_factory: sessionmaker,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Decimal,
    isolation_level: Optional[str],
) -> Tuple[int, int]:
    """
    Run apply_payment in its own session: commit on success, rollback on any failure.

    Returns (transaction_id, rows_affected). The id is read before commit
    because commit expires the ORM instance.
    """
    db = session_factory()
    try:
        mutation = apply_payment(
            db,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            isolation_level=isolation_level,
        )
        transaction_id = mutation.transaction.id
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    return transaction_id, mutation.rows_affected
