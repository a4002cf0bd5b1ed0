"""
Payments API endpoint
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import sessionmaker

from payment_core.auth.caller import Principal
from payment_core.auth.dependencies import get_current_principal
from payment_core.infrastructure.database import get_session_factory
from payment_core.schemas.payments import PaymentRequest, PaymentResponse
from payment_core.services.payment_service import process_payment

router = APIRouter()


@router.post(
    "/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Process a payment",
    description=(
        "Move an amount between two accounts in one atomic transaction. "
        "Only the authorized service login may call it; every attempt is audited. "
        "Errors: 403 Unauthorized, 400 ValidationFailed, 503 Error (rolled back, may be retried)."
    ),
)
async def create_payment(
    request: PaymentRequest,
    session_factory: sessionmaker = Depends(get_session_factory),
    principal: Principal = Depends(get_current_principal),
) -> PaymentResponse:
    """
    Process a payment.

    PaymentError subclasses propagate to payment_exception_handler,
    which maps them to 403/400/503.
    """
    result = process_payment(
        session_factory=session_factory,
        principal=principal,
        from_account_id=request.from_account_id,
        to_account_id=request.to_account_id,
        amount=request.amount,
    )

    return PaymentResponse(
        transaction_id=result.transaction_id,
        from_account_id=result.from_account_id,
        to_account_id=result.to_account_id,
        amount=str(result.amount),
        rows_affected=result.rows_affected,
    )
