"""Loan Routes — borrow a copy, return a loan.

Invariants:
    - Borrow picks the first available copy of the book at the given site
    - Returning an already returned loan is a fault: 409 INVALID_STATE
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.api.dependencies import get_loan_handlers
from libraryhub.api.routes.result_response import commit_result
from libraryhub.infrastructure.database import get_db
from libraryhub.schemas.requests import BorrowRequest
from libraryhub.schemas.responses import OperationResponse
from libraryhub.services.commands import BorrowBookCommand, ReturnBookCommand
from libraryhub.services.handle_loans import LoanHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


@router.post("", response_model=OperationResponse, status_code=201)
async def borrow_book(
    body: BorrowRequest,
    db: AsyncSession = Depends(get_db),
    handlers: LoanHandlers = Depends(get_loan_handlers),
):
    result = await handlers.borrow_book(
        BorrowBookCommand(
            user_id=body.user_id, book_id=body.book_id, site_id=body.site_id,
        ),
    )
    return await commit_result(db, result, created=True)


@router.post("/{loan_id}/return", response_model=OperationResponse)
async def return_book(
    loan_id: UUID,
    db: AsyncSession = Depends(get_db),
    handlers: LoanHandlers = Depends(get_loan_handlers),
):
    result = await handlers.return_book(ReturnBookCommand(loan_id=loan_id))
    return await commit_result(db, result)
