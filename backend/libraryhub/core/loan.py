"""Loan — borrow/return timing and overdue computation.

Invariants:
    - due_date >= borrowed_at (checked at construction)
    - returned_at is set at most once; a second return raises InvalidStateError
    - Overdue is a calendar-date comparison: time of day is ignored
    - Reference date is returned_at for a closed loan, else the evaluation time
    - Evaluating at a time before borrowed_at raises InvalidArgumentError
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

from libraryhub.core.domain_types import NIL_ID
from libraryhub.core.errors import InvalidArgumentError, InvalidStateError


@dataclass
class Loan:
    borrowed_at: datetime
    due_date: datetime
    user_account_id: UUID = NIL_ID
    book_copy_id: UUID = NIL_ID
    id: UUID = field(default_factory=uuid4)
    returned_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.due_date < self.borrowed_at:
            raise InvalidArgumentError(
                "Due date cannot be before borrowed date.", "due_date",
            )

    @property
    def is_returned(self) -> bool:
        return self.returned_at is not None

    def is_overdue(self, now: datetime) -> bool:
        return self._reference_date(now) > self.due_date.date()

    def get_overdue_days(self, now: datetime) -> int:
        reference = self._reference_date(now)
        due = self.due_date.date()
        if reference <= due:
            return 0
        return (reference - due).days

    def mark_as_returned(self, returned_at: datetime) -> None:
        if self.returned_at is not None:
            raise InvalidStateError("Loan is already returned.")
        if returned_at < self.borrowed_at:
            raise InvalidArgumentError(
                "Return date cannot be before borrowed date.", "returned_at",
            )
        self.returned_at = returned_at

    def _reference_date(self, now: datetime) -> date:
        if now < self.borrowed_at:
            raise InvalidArgumentError(
                "Now cannot be before borrowed date.", "now",
            )
        return (self.returned_at or now).date()
