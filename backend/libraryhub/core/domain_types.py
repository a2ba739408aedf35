"""Domain Types — identity types, copy status and lending constants.

Invariants:
    - BookId, SiteId, BookCopyId, UserId, LoanId wrap UUIDs
    - NIL_ID (all-zero UUID) is the "empty" id; never a valid reference
    - MAX_ACTIVE_LOANS is the single source of truth for the borrow limit

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, type-checker support
    - str Enums: serialize to JSON and DB columns without custom encoders
"""

from decimal import Decimal
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", UUID)
SiteId = NewType("SiteId", UUID)
BookCopyId = NewType("BookCopyId", UUID)
UserId = NewType("UserId", UUID)
LoanId = NewType("LoanId", UUID)

NIL_ID: UUID = UUID(int=0)


def is_empty_id(value: UUID | None) -> bool:
    return value is None or value == NIL_ID


# ─── Lending Constants ───────────────────────────────────────────

MAX_ACTIVE_LOANS: int = 5
DEFAULT_LOAN_PERIOD_DAYS: int = 14
DEFAULT_DAILY_RATE: Decimal = Decimal("0.5")


# ─── Enums ───────────────────────────────────────────────────────

class CopyStatus(str, Enum):
    """BookCopy lifecycle states — maps to DB `status` column."""
    AVAILABLE = "available"
    BORROWED = "borrowed"
    IN_TRANSFER = "in_transfer"


class ErrorCode(str, Enum):
    """Business failure codes returned in OperationResult.error_code."""
    USER_NOT_FOUND = "USER_NOT_FOUND"
    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
    SITE_NOT_FOUND = "SITE_NOT_FOUND"
    LOAN_NOT_FOUND = "LOAN_NOT_FOUND"
    COPY_NOT_FOUND = "COPY_NOT_FOUND"
    NO_COPY_AVAILABLE_AT_SITE = "NO_COPY_AVAILABLE_AT_SITE"
    NO_COPY_AVAILABLE_AT_SOURCE_SITE = "NO_COPY_AVAILABLE_AT_SOURCE_SITE"
    BORROW_LIMIT_REACHED = "BORROW_LIMIT_REACHED"
    COPY_NOT_AVAILABLE = "COPY_NOT_AVAILABLE"
    COPY_NOT_IN_TRANSFER = "COPY_NOT_IN_TRANSFER"
    SOURCE_AND_TARGET_MUST_DIFFER = "SOURCE_AND_TARGET_MUST_DIFFER"
    INVALID_BOOK_DATA = "INVALID_BOOK_DATA"
    INVALID_SITE_NAME = "INVALID_SITE_NAME"
    INVALID_USER_NAME = "INVALID_USER_NAME"
    INVALID_AMOUNT = "INVALID_AMOUNT"
