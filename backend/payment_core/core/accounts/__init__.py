"""
Accounts domain
"""
from payment_core.core.accounts.models import Account

__all__ = ["Account"]
