"""Request Schemas — Pydantic models for command endpoints.

Invariants:
    - Shape only: ids must parse as UUID, strings are bounded in length
    - Blank names/titles are NOT rejected here; the handlers answer them with
      business codes (INVALID_BOOK_DATA, INVALID_SITE_NAME, INVALID_USER_NAME)
    - quantity on transfer requests is 1-100
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class BookCreate(BaseModel):
    isbn: str = Field(max_length=32)
    title: str = Field(max_length=500)
    author: str = Field(max_length=300)


class SiteCreate(BaseModel):
    name: str = Field(max_length=200)
    address: str | None = Field(None, max_length=500)


class BookCopyCreate(BaseModel):
    site_id: UUID


class UserCreate(BaseModel):
    name: str = Field(max_length=200)


class PaymentCreate(BaseModel):
    amount: Decimal = Field(max_digits=12, decimal_places=2)


class BorrowRequest(BaseModel):
    user_id: UUID
    book_id: UUID
    site_id: UUID


class TransferRequest(BaseModel):
    book_id: UUID
    source_site_id: UUID
    target_site_id: UUID
    quantity: int = Field(1, ge=1, le=100)


class ReceiveTransferRequest(BaseModel):
    target_site_id: UUID
