"""Response Schemas — public-facing shapes for results and read models.

Invariants:
    - Every command endpoint answers OperationResponse (success, error_code, id)
    - Money is serialized as a decimal string, datetimes as ISO-8601
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


class OperationResponse(BaseModel):
    success: bool
    error_code: str | None = None
    id: UUID | None = None


class TransferBatchResponse(OperationResponse):
    """Transfer of `quantity` copies: id is the last copy, copy_ids all of them."""
    copy_ids: list[UUID] = []


class BookResponse(BaseModel):
    id: UUID
    isbn: str
    title: str
    author: str


class SiteResponse(BaseModel):
    id: UUID
    name: str
    address: str | None = None


class BookCopyResponse(BaseModel):
    id: UUID
    book_id: UUID
    site_id: UUID
    status: Literal["available", "borrowed", "in_transfer"]


class SiteBookSummaryResponse(BaseModel):
    book_id: UUID
    title: str
    total_copies: int
    available_copies: int
    borrowed_copies: int
    in_transfer_copies: int


class UserLoanResponse(BaseModel):
    loan_id: UUID
    book_copy_id: UUID
    book_title: str
    site_name: str
    borrowed_at: datetime
    due_date: datetime
    returned_at: datetime | None = None
    status: Literal["active", "returned"]
    is_overdue: bool


class UserDetailsResponse(BaseModel):
    id: UUID
    name: str
    active_loans_count: int
    amount_due: Decimal
    loans: list[UserLoanResponse] = []
