"""Return Service — closes a Loan, applies the penalty, releases the user's slot.

Invariants:
    - A loan is returned at most once: second call raises InvalidStateError
    - Order: mark loan returned -> apply penalty -> decrement user loans
    - BookCopy is NOT touched here; the caller marks the copy returned

Design Decisions:
    - Two-step contract at the orchestration boundary (ReturnBookHandler):
      this service owns Loan + UserAccount, the handler owns BookCopy
"""

from datetime import datetime
from decimal import Decimal

from libraryhub.core.errors import InvalidStateError
from libraryhub.core.guards import require_present
from libraryhub.core.loan import Loan
from libraryhub.core.penalty import PenaltyService
from libraryhub.core.user_account import UserAccount


class ReturnService:

    def __init__(self, penalty_service: PenaltyService):
        require_present(penalty_service, "penalty_service")
        self._penalty_service = penalty_service

    def return_book(
        self,
        user: UserAccount,
        loan: Loan,
        return_date: datetime,
        daily_rate: Decimal,
    ) -> Decimal:
        """Close the loan. Returns the penalty charged (0 when on time)."""
        require_present(user, "user")
        require_present(loan, "loan")
        if loan.is_returned:
            raise InvalidStateError("Loan is already returned.")

        loan.mark_as_returned(return_date)
        penalty = self._penalty_service.apply_overdue_penalty(
            user, loan, return_date, daily_rate,
        )
        user.decrement_loans()
        return penalty
