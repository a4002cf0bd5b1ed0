"""
Account API endpoints - READ-ONLY
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from payment_core.auth.caller import Principal
from payment_core.auth.dependencies import require_roles
from payment_core.core.security.models import Role
from payment_core.infrastructure.database import get_db
from payment_core.schemas.accounts import AccountResponse
from payment_core.services.account_helpers import get_account

router = APIRouter()


@router.get(
    "/accounts/{account_id}",
    response_model=AccountResponse,
    summary="Get account balance",
    description="Get an account and its current balance. READ-ONLY endpoint. Requires SERVICE, ADMIN, COMPLIANCE or OPS role.",
)
async def read_account(
    account_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SERVICE, Role.ADMIN, Role.COMPLIANCE, Role.OPS)),
) -> AccountResponse:
    account = get_account(db, account_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="ACCOUNT_NOT_FOUND",
        )
    return AccountResponse(
        id=account.id,
        name=account.name,
        balance=str(account.balance),
    )
