"""
Admin payment audit endpoint - READ-ONLY
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from payment_core.auth.caller import Principal
from payment_core.auth.dependencies import require_roles
from payment_core.core.compliance.models import AuditStatus
from payment_core.core.security.models import Role
from payment_core.infrastructure.database import get_db
from payment_core.schemas.audit import PaymentAuditItem, PaymentAuditListResponse
from payment_core.services.audit_service import list_payment_audit

router = APIRouter()


@router.get(
    "/payment-audit",
    response_model=PaymentAuditListResponse,
    summary="List payment audit rows",
    description="List payment attempts and their outcomes, newest first. Requires ADMIN or COMPLIANCE role.",
)
async def get_payment_audit(
    status: Optional[AuditStatus] = Query(None, description="Filter by audit status"),
    account_id: Optional[int] = Query(None, description="Match source or destination account"),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.ADMIN, Role.COMPLIANCE)),
) -> PaymentAuditListResponse:
    rows = list_payment_audit(db, status=status, account_id=account_id, limit=limit)
    items = [
        PaymentAuditItem(
            id=row.id,
            from_account_id=row.from_account_id,
            to_account_id=row.to_account_id,
            amount=str(row.amount) if row.amount is not None else None,
            attempted_by=row.attempted_by,
            status=row.status.value,
            message=row.message,
            trace_id=row.trace_id,
            created_at=row.created_at.isoformat(),
        )
        for row in rows
    ]
    return PaymentAuditListResponse(items=items, count=len(items))
