"""Loan Handlers — borrow_book and return_book.

Invariants:
    - borrow_book: USER_NOT_FOUND, then NO_COPY_AVAILABLE_AT_SITE, then the
      BorrowingService checks (BORROW_LIMIT_REACHED, COPY_NOT_AVAILABLE)
    - Dates come from the injected Clock, never from the system time directly
    - Aggregates are written back only after the domain call succeeded
    - return_book: LOAN_NOT_FOUND / USER_NOT_FOUND / COPY_NOT_FOUND are results;
      a second return of the same loan raises InvalidStateError (fault)

Design Decisions:
    - ReturnService closes Loan + UserAccount; this handler then marks the
      BookCopy returned. The two steps stay separate at this boundary.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from libraryhub.core.borrowing import BorrowingService
from libraryhub.core.domain_types import (
    DEFAULT_DAILY_RATE, DEFAULT_LOAN_PERIOD_DAYS, ErrorCode,
)
from libraryhub.core.guards import require_present
from libraryhub.core.repository_protocols import (
    BookCopyRepository, Clock, LoanRepository, UserRepository,
)
from libraryhub.core.results import OperationResult
from libraryhub.core.returning import ReturnService
from libraryhub.services.commands import BorrowBookCommand, ReturnBookCommand

logger = logging.getLogger(__name__)


class LoanHandlers:
    """Borrow/return orchestration around the pure domain services."""

    def __init__(
        self,
        users: UserRepository,
        copies: BookCopyRepository,
        loans: LoanRepository,
        clock: Clock,
        borrowing_service: BorrowingService,
        return_service: ReturnService,
        loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
        daily_rate: Decimal = DEFAULT_DAILY_RATE,
    ):
        self._users = users
        self._copies = copies
        self._loans = loans
        self._clock = clock
        self._borrowing = borrowing_service
        self._returning = return_service
        self._loan_period = timedelta(days=loan_period_days)
        self._daily_rate = Decimal(daily_rate)

    async def borrow_book(self, command: BorrowBookCommand) -> OperationResult:
        """Borrow the first available copy of a book at a site. Payload: loan id."""
        require_present(command, "command")
        log_extra = {"user_id": str(command.user_id), "book_id": str(command.book_id)}

        user = await self._users.get_by_id(command.user_id)
        if user is None:
            return self._failed(ErrorCode.USER_NOT_FOUND, log_extra)

        copy = await self._copies.find_available_copy(command.book_id, command.site_id)
        if copy is None:
            return self._failed(ErrorCode.NO_COPY_AVAILABLE_AT_SITE, log_extra)

        borrowed_at = self._clock.utc_now()
        due_date = borrowed_at + self._loan_period
        result = self._borrowing.try_borrow(user, copy, borrowed_at, due_date)
        if not result.success:
            return self._failed(result.error_code, log_extra)

        loan = result.payload
        await self._copies.update(copy)
        await self._users.update(user)
        await self._loans.add(loan)
        logger.info(
            f"Loan {loan.id} opened, due {due_date.date().isoformat()}",
            extra={**log_extra, "loan_id": str(loan.id), "book_copy_id": str(copy.id)},
        )
        return OperationResult.ok(loan.id)

    async def return_book(self, command: ReturnBookCommand) -> OperationResult:
        """Close a loan, charge any penalty, free the copy. Payload: loan id."""
        require_present(command, "command")
        log_extra = {"loan_id": str(command.loan_id)}

        loan = await self._loans.get_by_id(command.loan_id)
        if loan is None:
            return self._failed(ErrorCode.LOAN_NOT_FOUND, log_extra)

        user = await self._users.get_by_id(loan.user_account_id)
        if user is None:
            return self._failed(ErrorCode.USER_NOT_FOUND, log_extra)

        copy = await self._copies.get_by_id(loan.book_copy_id)
        if copy is None:
            return self._failed(ErrorCode.COPY_NOT_FOUND, log_extra)

        return_date = self._clock.utc_now()
        penalty = self._returning.return_book(user, loan, return_date, self._daily_rate)
        copy.mark_as_returned()

        await self._loans.update(loan)
        await self._users.update(user)
        await self._copies.update(copy)
        logger.info(
            f"Loan {loan.id} returned, penalty {penalty}",
            extra={**log_extra, "user_id": str(user.id), "book_copy_id": str(copy.id)},
        )
        return OperationResult.ok(loan.id)

    @staticmethod
    def _failed(code: "ErrorCode | str", log_extra: dict) -> OperationResult:
        result = OperationResult.fail(code)
        logger.info(
            f"Loan operation refused: {result.error_code}",
            extra={**log_extra, "error_code": result.error_code},
        )
        return result
