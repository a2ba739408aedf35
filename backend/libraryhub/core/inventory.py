"""Site Inventory — pure per-book copy counts for one site.

Invariants:
    - Only copies whose site_id matches are counted
    - total == available + borrowed + in_transfer for every row
    - Books without a copy at the site are omitted
    - Rows sorted by title (case-insensitive), then book id
    - Never raises on a copy whose book is unknown: the title falls back to ""
"""

from dataclasses import dataclass
from uuid import UUID

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.catalog import Book
from libraryhub.core.domain_types import CopyStatus


@dataclass(frozen=True)
class SiteBookSummary:
    book_id: UUID
    title: str
    total_copies: int
    available_copies: int
    borrowed_copies: int
    in_transfer_copies: int


def summarize_site_inventory(
    site_id: UUID, books: list[Book], copies: list[BookCopy],
) -> list[SiteBookSummary]:
    """Count copies per book and status at site_id. Pure, no IO."""
    titles = {b.id: b.title for b in books}
    counts: dict[UUID, dict[CopyStatus, int]] = {}
    for copy in copies:
        if copy.site_id != site_id:
            continue
        per_status = counts.setdefault(copy.book_id, {s: 0 for s in CopyStatus})
        per_status[copy.status] += 1

    rows = [
        SiteBookSummary(
            book_id=book_id,
            title=titles.get(book_id, ""),
            total_copies=sum(per_status.values()),
            available_copies=per_status[CopyStatus.AVAILABLE],
            borrowed_copies=per_status[CopyStatus.BORROWED],
            in_transfer_copies=per_status[CopyStatus.IN_TRANSFER],
        )
        for book_id, per_status in counts.items()
    ]
    return sorted(rows, key=lambda r: (r.title.lower(), str(r.book_id)))
