"""Penalty Service — overdue penalty computation and application.

Invariants:
    - calculate_penalty is pure: overdue_days * daily_rate, never negative
    - daily_rate < 0 raises InvalidArgumentError
    - apply_overdue_penalty charges the user only when the penalty is > 0
"""

from datetime import datetime
from decimal import Decimal

from libraryhub.core.errors import InvalidArgumentError
from libraryhub.core.loan import Loan
from libraryhub.core.user_account import UserAccount

ZERO = Decimal("0")


class PenaltyService:

    def calculate_penalty(
        self, loan: Loan, now: datetime, daily_rate: Decimal,
    ) -> Decimal:
        daily_rate = Decimal(daily_rate)
        if daily_rate < 0:
            raise InvalidArgumentError(
                "Daily rate must be non-negative.", "daily_rate",
            )

        overdue_days = loan.get_overdue_days(now)
        if overdue_days <= 0:
            return ZERO
        return overdue_days * daily_rate

    def apply_overdue_penalty(
        self, user: UserAccount, loan: Loan, now: datetime, daily_rate: Decimal,
    ) -> Decimal:
        """Charge the penalty to the user. Returns the amount charged."""
        penalty = self.calculate_penalty(loan, now, daily_rate)
        if penalty <= ZERO:
            return ZERO
        user.add_amount(penalty)
        return penalty
