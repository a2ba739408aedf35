"""Borrowing Service — decides whether a user may borrow a copy, creates the Loan.

Invariants:
    - Argument faults (None user/copy, due_date < borrowed_at) are raised before
      any business check
    - Business checks run in a fixed order: borrow limit, then copy availability
    - Copy and user are mutated only on the success path
"""

from datetime import datetime

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.domain_types import MAX_ACTIVE_LOANS, CopyStatus, ErrorCode
from libraryhub.core.errors import InvalidArgumentError
from libraryhub.core.guards import require_present
from libraryhub.core.loan import Loan
from libraryhub.core.results import OperationResult
from libraryhub.core.user_account import UserAccount


class BorrowingService:
    """Stateless domain service; one instance can be shared."""

    def try_borrow(
        self,
        user: UserAccount,
        copy: BookCopy,
        borrowed_at: datetime,
        due_date: datetime,
    ) -> OperationResult[Loan]:
        require_present(user, "user")
        require_present(copy, "copy")
        if due_date < borrowed_at:
            raise InvalidArgumentError(
                "Due date cannot be before borrowed date.", "due_date",
            )

        if user.active_loans_count >= MAX_ACTIVE_LOANS:
            return OperationResult.fail(ErrorCode.BORROW_LIMIT_REACHED)

        if copy.status != CopyStatus.AVAILABLE:
            return OperationResult.fail(ErrorCode.COPY_NOT_AVAILABLE)

        loan = Loan(
            borrowed_at=borrowed_at,
            due_date=due_date,
            user_account_id=user.id,
            book_copy_id=copy.id,
        )
        copy.mark_as_borrowed()
        user.increment_loans()
        return OperationResult.ok(loan)
