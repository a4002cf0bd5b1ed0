"""
Ledger service - the only write path to Account.balance
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session

from payment_core.core.accounts.models import Account
from payment_core.core.ledger.models import PaymentTransaction
from payment_core.services.account_helpers import get_balances
from payment_core.services.exceptions import LedgerMutationError, LedgerInvariantError
from payment_core.utils.ledger_validator import validate_conservation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerMutation:
    """Outcome of apply_payment (not yet committed)"""
    transaction: PaymentTransaction
    rows_affected: int


def debit_account(db: Session, account_id: int, amount: Decimal) -> int:
    """Decrease an account balance in place. Returns the number of rows updated."""
    result = db.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(balance=Account.balance - amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise LedgerMutationError(f"Debit of account {account_id} updated {result.rowcount} rows")
    return result.rowcount


def credit_account(db: Session, account_id: int, amount: Decimal) -> int:
    """Increase an account balance in place. Returns the number of rows updated."""
    result = db.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(balance=Account.balance + amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise LedgerMutationError(f"Credit of account {account_id} updated {result.rowcount} rows")
    return result.rowcount


def record_transaction(
    db: Session,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Decimal,
) -> PaymentTransaction:
    """Append the PaymentTransaction row for a payment"""
    transaction = PaymentTransaction(
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        amount=amount,
    )
    db.add(transaction)
    db.flush()  # Get transaction.id
    return transaction


def apply_payment(
    db: Session,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Decimal,
    isolation_level: Optional[str] = None,
) -> LedgerMutation:
    """
    Move amount from one account to another and record the transaction.

    Runs inside the caller's transaction on db and does NOT commit: the
    caller commits on success and rolls back on any exception, so either
    all of the steps below take effect or none do.

    Steps:
    1. Pin the isolation level (if configured)
    2. Lock both account rows (SELECT ... FOR UPDATE) and snapshot balances
    3. Debit the source account
    4. Credit the destination account
    5. Append the PaymentTransaction
    6. Verify conservation (total of both balances unchanged)

    The request is expected to have been validated already.

    Raises:
        LedgerMutationError: an account row vanished before it was updated
        LedgerInvariantError: balances do not sum to the same total
        SQLAlchemyError: storage faults, deadlocks, serialization failures
    """
    if isolation_level:
        # Must be the first use of the session in this transaction
        db.connection(execution_options={"isolation_level": isolation_level})

    account_ids = {from_account_id, to_account_id}

    # Row locks are held until commit/rollback
    before = get_balances(db, account_ids, for_update=True)

    rows_affected = debit_account(db, from_account_id, amount)
    rows_affected += credit_account(db, to_account_id, amount)

    transaction = record_transaction(
        db,
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        amount=amount,
    )
    rows_affected += 1

    after = get_balances(db, account_ids)
    if not validate_conservation(before, after):
        raise LedgerInvariantError(
            f"Conservation violated for payment {from_account_id} -> {to_account_id}: "
            f"before={before}, after={after}"
        )

    logger.debug(
        "Ledger mutation applied",
        extra={
            "payment_transaction_id": transaction.id,
            "from_account_id": from_account_id,
            "to_account_id": to_account_id,
            "amount": str(amount),
        },
    )
    return LedgerMutation(transaction=transaction, rows_affected=rows_affected)
