"""Commands — immutable inputs to the handlers in services/.

Handlers validate content (blank names, equal sites, ...) and answer with an
OperationResult; commands only carry the fields.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class RegisterBookCommand:
    isbn: str
    title: str
    author: str


@dataclass(frozen=True)
class CreateSiteCommand:
    name: str
    address: str | None = None


@dataclass(frozen=True)
class AddBookCopyCommand:
    book_id: UUID
    site_id: UUID


@dataclass(frozen=True)
class RegisterUserCommand:
    name: str


@dataclass(frozen=True)
class PayAmountCommand:
    user_id: UUID
    amount: Decimal


@dataclass(frozen=True)
class BorrowBookCommand:
    user_id: UUID
    book_id: UUID
    site_id: UUID


@dataclass(frozen=True)
class ReturnBookCommand:
    loan_id: UUID


@dataclass(frozen=True)
class RequestTransferCommand:
    book_id: UUID
    source_site_id: UUID
    target_site_id: UUID


@dataclass(frozen=True)
class ReceiveTransferCommand:
    book_copy_id: UUID
    target_site_id: UUID
