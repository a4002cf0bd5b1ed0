"""
Payment request validation
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional
from sqlalchemy.orm import Session

from payment_core.services.account_helpers import account_exists
from payment_core.services.exceptions import PaymentValidationError

AMOUNT_QUANTUM = Decimal("0.01")

# Numeric(18, 2) holds at most 16 integer digits
AMOUNT_LIMIT = Decimal("1e16")


def normalize_amount(amount: Any) -> Optional[Decimal]:
    """
    Convert an amount to a scale-2 Decimal (ROUND_HALF_UP).

    Returns None for values that are not finite numbers or do not fit a
    Numeric(18, 2) column; those are rejected by validate_payment_request.
    """
    if amount is None:
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        if not value.is_finite():
            return None
        value = value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return None
    if abs(value) >= AMOUNT_LIMIT:
        return None
    return value


def validate_payment_request(
    db: Session,
    *,
    from_account_id: int,
    to_account_id: int,
    amount: Optional[Decimal],
) -> None:
    """
    Validate a payment request. No side effects.

    Rules (checked in order):
    1. amount is a number (normalize_amount did not return None)
    2. amount is greater than 0
    3. the source account exists
    4. the destination account exists

    Paying an account from itself is allowed, and the source balance is
    not checked: overdraft is permitted.

    Raises:
        PaymentValidationError: first rule that does not hold
    """
    if amount is None:
        raise PaymentValidationError(
            "Validation failed: amount must be a finite number below 10^16"
        )

    if amount <= 0:
        raise PaymentValidationError("Validation failed: amount must be greater than 0")

    if not account_exists(db, from_account_id):
        raise PaymentValidationError(
            f"Validation failed: source account {from_account_id} does not exist"
        )

    if not account_exists(db, to_account_id):
        raise PaymentValidationError(
            f"Validation failed: destination account {to_account_id} does not exist"
        )
