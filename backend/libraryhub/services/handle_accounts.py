"""Account Handlers — register_user, pay_amount, user_details, site_inventory.

Invariants:
    - Blank user name -> INVALID_USER_NAME (returned, never raised)
    - New users start with 0 active loans and 0 due
    - pay_amount: amount <= 0 -> INVALID_AMOUNT; overpaying is accepted
    - user_details evaluates "overdue" with the injected Clock
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from libraryhub.core.domain_types import ErrorCode
from libraryhub.core.guards import require_present
from libraryhub.core.inventory import SiteBookSummary, summarize_site_inventory
from libraryhub.core.loan import Loan
from libraryhub.core.repository_protocols import (
    BookCopyRepository, BookRepository, Clock, LoanRepository,
    SiteRepository, UserRepository,
)
from libraryhub.core.results import OperationResult
from libraryhub.core.user_account import UserAccount
from libraryhub.services.commands import PayAmountCommand, RegisterUserCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserLoanInfo:
    loan_id: UUID
    book_copy_id: UUID
    book_title: str
    site_name: str
    borrowed_at: datetime
    due_date: datetime
    returned_at: datetime | None
    is_overdue: bool

    @property
    def status(self) -> str:
        return "returned" if self.returned_at is not None else "active"


@dataclass(frozen=True)
class UserDetails:
    user_id: UUID
    name: str
    active_loans_count: int
    amount_due: Decimal
    loans: list[UserLoanInfo]


class AccountHandlers:
    """User accounts plus the read models the front desk needs."""

    def __init__(
        self,
        users: UserRepository,
        loans: LoanRepository,
        copies: BookCopyRepository,
        books: BookRepository,
        sites: SiteRepository,
        clock: Clock,
    ):
        self._users = users
        self._loans = loans
        self._copies = copies
        self._books = books
        self._sites = sites
        self._clock = clock

    async def register_user(self, command: RegisterUserCommand) -> OperationResult:
        require_present(command, "command")
        if command.name is None or not command.name.strip():
            return OperationResult.fail(ErrorCode.INVALID_USER_NAME)

        user = UserAccount(name=command.name)
        await self._users.add(user)
        logger.info(f"User registered: {user.name}", extra={"user_id": str(user.id)})
        return OperationResult.ok(user.id)

    async def pay_amount(self, command: PayAmountCommand) -> OperationResult:
        require_present(command, "command")
        if command.amount is None or Decimal(command.amount) <= 0:
            return OperationResult.fail(ErrorCode.INVALID_AMOUNT)

        user = await self._users.get_by_id(command.user_id)
        if user is None:
            return OperationResult.fail(ErrorCode.USER_NOT_FOUND)

        user.pay_amount(Decimal(command.amount))
        await self._users.update(user)
        logger.info(
            f"Payment of {command.amount} recorded, balance {user.amount_due}",
            extra={"user_id": str(user.id)},
        )
        return OperationResult.ok(user.id)

    async def user_details(self, user_id: UUID) -> UserDetails | None:
        user = await self._users.get_by_id(user_id)
        if user is None:
            return None

        now = self._clock.utc_now()
        loans = [
            await self._loan_info(loan, now)
            for loan in await self._loans.get_loans_for_user(user_id)
        ]
        return UserDetails(
            user_id=user.id,
            name=user.name,
            active_loans_count=user.active_loans_count,
            amount_due=user.amount_due,
            loans=loans,
        )

    async def site_inventory(self, site_id: UUID) -> list[SiteBookSummary] | None:
        if await self._sites.get_by_id(site_id) is None:
            return None
        copies = await self._copies.get_by_site(site_id)
        books = await self._books.get_all()
        return summarize_site_inventory(site_id, books, copies)

    async def _loan_info(self, loan: Loan, now: datetime) -> UserLoanInfo:
        copy = await self._copies.get_by_id(loan.book_copy_id)
        book = await self._books.get_by_id(copy.book_id) if copy else None
        site = await self._sites.get_by_id(copy.site_id) if copy else None
        return UserLoanInfo(
            loan_id=loan.id,
            book_copy_id=loan.book_copy_id,
            book_title=book.title if book else "",
            site_name=site.name if site else "",
            borrowed_at=loan.borrowed_at,
            due_date=loan.due_date,
            returned_at=loan.returned_at,
            is_overdue=loan.is_overdue(max(now, loan.borrowed_at)),
        )
