"""
Ledger domain
"""
from payment_core.core.ledger.models import PaymentTransaction

__all__ = ["PaymentTransaction"]
