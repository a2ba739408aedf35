"""BookCopy — a physical copy and its availability state machine.

Invariants:
    - book_id and site_id are never the nil id
    - Created AVAILABLE; transitions:
        AVAILABLE -> BORROWED -> AVAILABLE        (borrow / return)
        AVAILABLE -> IN_TRANSFER -> AVAILABLE     (transfer / arrival, site may change)
    - No BORROWED <-> IN_TRANSFER transition
    - Forbidden transitions raise InvalidStateError and leave the copy unchanged

Design Decisions:
    - The copy holds ids only (book_id, site_id); it never references a Book,
      Site or Loan object. Services correlate aggregates by id.
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from libraryhub.core.domain_types import CopyStatus
from libraryhub.core.errors import InvalidStateError
from libraryhub.core.guards import require_id


@dataclass
class BookCopy:
    book_id: UUID
    site_id: UUID
    id: UUID = field(default_factory=uuid4)
    status: CopyStatus = CopyStatus.AVAILABLE

    def __post_init__(self) -> None:
        require_id(self.book_id, "book_id", "BookId cannot be empty.")
        require_id(self.site_id, "site_id", "SiteId cannot be empty.")

    @property
    def is_available(self) -> bool:
        return self.status == CopyStatus.AVAILABLE

    def mark_as_borrowed(self) -> None:
        if self.status != CopyStatus.AVAILABLE:
            raise InvalidStateError("Copy must be available to be borrowed.")
        self.status = CopyStatus.BORROWED

    def mark_as_returned(self) -> None:
        if self.status != CopyStatus.BORROWED:
            raise InvalidStateError("Copy must be borrowed to be returned.")
        self.status = CopyStatus.AVAILABLE

    def mark_as_in_transfer(self) -> None:
        if self.status != CopyStatus.AVAILABLE:
            raise InvalidStateError("Copy must be available to be put in transfer.")
        self.status = CopyStatus.IN_TRANSFER

    def mark_as_arrived(self, new_site_id: UUID) -> None:
        """Complete a transfer: copy becomes AVAILABLE at new_site_id."""
        if self.status != CopyStatus.IN_TRANSFER:
            raise InvalidStateError("Copy must be in transfer to arrive at a site.")
        self.site_id = require_id(new_site_id, "new_site_id", "SiteId cannot be empty.")
        self.status = CopyStatus.AVAILABLE

    def move_to_site(self, new_site_id: UUID) -> None:
        """Reassign the site without touching status."""
        self.site_id = require_id(new_site_id, "new_site_id", "SiteId cannot be empty.")
