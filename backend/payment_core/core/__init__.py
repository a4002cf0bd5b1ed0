"""
Core domain models - Export all models so Base.metadata is complete
"""

from payment_core.core.accounts.models import Account
from payment_core.core.ledger.models import PaymentTransaction
from payment_core.core.compliance.models import PaymentAuditLog, AuditStatus

__all__ = ["Account", "PaymentTransaction", "PaymentAuditLog", "AuditStatus"]
