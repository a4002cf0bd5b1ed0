"""
Ledger invariant validation utilities
"""

import logging
from decimal import Decimal
from typing import Mapping

from payment_core.utils.metrics import record_ledger_invariant_violation

logger = logging.getLogger(__name__)


def validate_conservation(
    before: Mapping[int, Decimal],
    after: Mapping[int, Decimal],
) -> bool:
    """
    Validate the conservation invariant for a payment.

    Invariant: the accounts touched by a payment hold the same total
    before and after it (the debit and the credit cancel out), and no
    account appeared or disappeared in between.

    Args:
        before: {account_id: balance} read under lock before the updates
        after: {account_id: balance} read after the updates

    Returns:
        True if invariant holds, False otherwise

    Side effects:
        Records metric if violation detected
    """
    if set(before) != set(after):
        logger.error(
            f"Conservation invariant violation: account set changed, "
            f"before={sorted(before)}, after={sorted(after)}"
        )
        record_ledger_invariant_violation()
        return False

    total_before = sum(before.values(), Decimal("0"))
    total_after = sum(after.values(), Decimal("0"))

    if total_before != total_after:
        logger.error(
            f"Conservation invariant violation: accounts={sorted(before)}, "
            f"total_before={total_before}, total_after={total_after}"
        )
        record_ledger_invariant_violation()
        return False

    return True
