"""UserAccount — active-loan counter and amount-due balance.

Invariants:
    - name is stored trimmed and never blank
    - active_loans_count >= 0; decrementing at zero raises InvalidStateError
    - add_amount / pay_amount reject negative amounts; 0 is a no-op
    - amount_due may go negative: overpayment is accepted, not validated
"""

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID, uuid4

from libraryhub.core.errors import InvalidArgumentError, InvalidStateError
from libraryhub.core.guards import require_text


@dataclass
class UserAccount:
    name: str
    id: UUID = field(default_factory=uuid4)
    active_loans_count: int = 0
    amount_due: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.name = require_text(self.name, "name", "Name cannot be empty.")
        if self.active_loans_count < 0:
            raise InvalidArgumentError(
                "Active loans count cannot be negative.", "active_loans_count",
            )
        self.amount_due = Decimal(self.amount_due)

    def increment_loans(self) -> None:
        self.active_loans_count += 1

    def decrement_loans(self) -> None:
        if self.active_loans_count == 0:
            raise InvalidStateError("User has no active loan to close.")
        self.active_loans_count -= 1

    def add_amount(self, amount: Decimal) -> None:
        """Charge the account (penalties)."""
        self.amount_due += _non_negative(amount)

    def pay_amount(self, amount: Decimal) -> None:
        """Credit the account. Paying more than is due leaves a negative balance."""
        self.amount_due -= _non_negative(amount)


def _non_negative(amount: Decimal) -> Decimal:
    amount = Decimal(amount)
    if amount < 0:
        raise InvalidArgumentError("Amount cannot be negative.", "amount")
    return amount
