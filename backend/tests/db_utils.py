"""
Database read helpers for tests

Each helper opens its own short-lived session so values come straight from
the database, not from a session identity map.
"""

from decimal import Decimal
from typing import Dict, List
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from payment_core.core.accounts.models import Account
from payment_core.core.compliance.models import PaymentAuditLog
from payment_core.core.ledger.models import PaymentTransaction


def read_balances(session_factory: sessionmaker) -> Dict[int, Decimal]:
    db = session_factory()
    try:
        return {
            row.id: Decimal(str(row.balance))
            for row in db.execute(select(Account.id, Account.balance))
        }
    finally:
        db.close()


def read_audit_statuses(session_factory: sessionmaker) -> List[str]:
    db = session_factory()
    try:
        return [
            status.value
            for status in db.execute(
                select(PaymentAuditLog.status).order_by(PaymentAuditLog.id)
            ).scalars()
        ]
    finally:
        db.close()


def read_audit_rows(session_factory: sessionmaker) -> List[PaymentAuditLog]:
    db = session_factory()
    try:
        rows = list(db.execute(select(PaymentAuditLog).order_by(PaymentAuditLog.id)).scalars())
        for row in rows:
            db.expunge(row)
        return rows
    finally:
        db.close()


def read_transactions(session_factory: sessionmaker) -> List[PaymentTransaction]:
    db = session_factory()
    try:
        rows = list(db.execute(select(PaymentTransaction).order_by(PaymentTransaction.id)).scalars())
        for row in rows:
            db.expunge(row)
        return rows
    finally:
        db.close()
