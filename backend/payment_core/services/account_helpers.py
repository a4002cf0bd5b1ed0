"""
Account lookup and balance helpers (read-only)
"""

from decimal import Decimal
from typing import Dict, Iterable, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from payment_core.core.accounts.models import Account


def get_account(db: Session, account_id: int) -> Optional[Account]:
    """Get an account by id, or None"""
    return db.execute(
        select(Account).where(Account.id == account_id)
    ).scalar_one_or_none()


def account_exists(db: Session, account_id: int) -> bool:
    return db.execute(
        select(Account.id).where(Account.id == account_id)
    ).first() is not None


def get_balances(db: Session, account_ids: Iterable[int], *, for_update: bool = False) -> Dict[int, Decimal]:
    """
    Get balances for several accounts as {account_id: balance}.

    Missing accounts are absent from the result. With for_update=True the
    rows are locked (SELECT ... FOR UPDATE) until the surrounding
    transaction ends.
    """
    ids = sorted(set(account_ids))
    query = select(Account.id, Account.balance).where(Account.id.in_(ids))
    if for_update:
        query = query.with_for_update()
    return {
        row.id: Decimal(str(row.balance))
        for row in db.execute(query)
    }
