"""
Payment error taxonomy
"""

from payment_core.core.compliance.models import AuditStatus


class PaymentError(Exception):
    """
    Base class for errors surfaced by the payment procedure.

    Each subclass maps to the terminal audit status written before it is
    raised, so callers can present or classify it without parsing text.
    """

    code = "PAYMENT_ERROR"
    status = AuditStatus.ERROR
    retryable = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UnauthorizedPaymentError(PaymentError):
    """Raised when the caller is not the authorized service login"""

    code = "UNAUTHORIZED"
    status = AuditStatus.UNAUTHORIZED


class PaymentValidationError(PaymentError):
    """Raised when the amount is not positive or an account does not exist"""

    code = "VALIDATION_FAILED"
    status = AuditStatus.VALIDATION_FAILED


class PaymentExecutionError(PaymentError):
    """
    Raised when the ledger transaction failed and was rolled back.

    The message is the underlying failure's message, unchanged. Deadlocks
    and serialization failures land here, so the caller may retry.
    """

    code = "PAYMENT_FAILED"
    status = AuditStatus.ERROR
    retryable = True


class LedgerMutationError(Exception):
    """Raised when a balance update does not touch exactly one account row"""
    pass


class LedgerInvariantError(Exception):
    """Raised when the balances of the two accounts do not sum to the same total"""
    pass


class InvalidCallerTokenError(Exception):
    """Raised when a bearer token cannot be decoded into a caller identity"""
    pass
