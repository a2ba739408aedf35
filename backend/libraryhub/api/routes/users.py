"""User Routes — registration, account details with loans, payments.

Invariants:
    - Payments of 0 or less answer INVALID_AMOUNT (400)
    - amount_due may be negative after an overpayment
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.api.dependencies import get_account_handlers
from libraryhub.api.routes.result_response import commit_result
from libraryhub.core.errors import ResourceNotFoundError
from libraryhub.infrastructure.database import get_db
from libraryhub.schemas.requests import PaymentCreate, UserCreate
from libraryhub.schemas.responses import (
    OperationResponse, UserDetailsResponse, UserLoanResponse,
)
from libraryhub.services.commands import PayAmountCommand, RegisterUserCommand
from libraryhub.services.handle_accounts import AccountHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", response_model=OperationResponse, status_code=201)
async def register_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    handlers: AccountHandlers = Depends(get_account_handlers),
):
    result = await handlers.register_user(RegisterUserCommand(name=body.name))
    return await commit_result(db, result, created=True)


@router.get("/{user_id}", response_model=UserDetailsResponse)
async def get_user(
    user_id: UUID, handlers: AccountHandlers = Depends(get_account_handlers),
):
    """Account balance, active loan count, and full loan history."""
    details = await handlers.user_details(user_id)
    if details is None:
        raise ResourceNotFoundError("UserAccount", str(user_id))
    return UserDetailsResponse(
        id=details.user_id,
        name=details.name,
        active_loans_count=details.active_loans_count,
        amount_due=details.amount_due,
        loans=[
            UserLoanResponse(
                loan_id=info.loan_id,
                book_copy_id=info.book_copy_id,
                book_title=info.book_title,
                site_name=info.site_name,
                borrowed_at=info.borrowed_at,
                due_date=info.due_date,
                returned_at=info.returned_at,
                status=info.status,
                is_overdue=info.is_overdue,
            )
            for info in details.loans
        ],
    )


@router.post("/{user_id}/payments", response_model=OperationResponse)
async def pay_amount(
    user_id: UUID,
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    handlers: AccountHandlers = Depends(get_account_handlers),
):
    result = await handlers.pay_amount(
        PayAmountCommand(user_id=user_id, amount=body.amount),
    )
    return await commit_result(db, result)
