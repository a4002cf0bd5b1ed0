"""
Identity gate - only the authorized service login may move money
"""

import logging
from typing import Optional

from payment_core.auth.caller import Principal
from payment_core.infrastructure.settings import Settings, get_settings
from payment_core.services.exceptions import UnauthorizedPaymentError

logger = logging.getLogger(__name__)


def authorize_caller(principal: Optional[Principal], settings: Optional[Settings] = None) -> None:
    """
    Allow the call only if the caller is AUTHORIZED_PRINCIPAL.

    The comparison is exact (case-sensitive). Roles are not consulted:
    an ADMIN token for another login is still rejected.

    Raises:
        UnauthorizedPaymentError: any other caller, or no caller at all
    """
    settings = settings or get_settings()
    subject = principal.subject if principal is not None else None

    if not subject or subject != settings.AUTHORIZED_PRINCIPAL:
        logger.warning(
            "Payment caller rejected by identity gate",
            extra={"attempted_by": subject},
        )
        raise UnauthorizedPaymentError(
            f"Unauthorized: caller '{subject}' is not permitted to process payments"
        )
