"""Loan Handlers — borrow_book and return_book against SQLite repositories.

Tests:
    - Borrow: loan stored with due = now + 14 days, copy BORROWED, counter 1
    - USER_NOT_FOUND / NO_COPY_AVAILABLE_AT_SITE, nothing mutated
    - Sixth borrow -> BORROW_LIMIT_REACHED
    - Return: loan closed, copy AVAILABLE, counter back to 0
    - Late return charges 0.5 per calendar day
    - Second return raises InvalidStateError
    - LOAN_NOT_FOUND for an unknown loan
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from libraryhub.core.domain_types import CopyStatus
from libraryhub.core.errors import InvalidStateError
from libraryhub.infrastructure.repositories import (
    SqlBookCopyRepository, SqlLoanRepository, SqlUserRepository,
)
from libraryhub.services.commands import (
    AddBookCopyCommand, BorrowBookCommand, ReturnBookCommand,
)


def _borrow(lib, site=None, user=None) -> BorrowBookCommand:
    return BorrowBookCommand(
        user_id=user or lib.user_id, book_id=lib.book_id, site_id=site or lib.site_a,
    )


async def test_borrow_opens_loan(loans, library, clock, test_db):
    lib = await library.seed()

    result = await loans.borrow_book(_borrow(lib))

    assert result.success
    loan = await SqlLoanRepository(test_db).get_by_id(result.payload)
    assert loan.borrowed_at == clock.utc_now()
    assert loan.due_date == clock.utc_now() + timedelta(days=14)
    assert loan.book_copy_id == lib.copy_ids[0]
    copy = await SqlBookCopyRepository(test_db).get_by_id(lib.copy_ids[0])
    assert copy.status == CopyStatus.BORROWED
    user = await SqlUserRepository(test_db).get_by_id(lib.user_id)
    assert user.active_loans_count == 1


async def test_borrow_unknown_user(loans, library, test_db):
    lib = await library.seed()
    result = await loans.borrow_book(_borrow(lib, user=uuid4()))
    assert result.error_code == "USER_NOT_FOUND"
    copy = await SqlBookCopyRepository(test_db).get_by_id(lib.copy_ids[0])
    assert copy.status == CopyStatus.AVAILABLE


async def test_borrow_at_site_without_copy(loans, library):
    lib = await library.seed()
    result = await loans.borrow_book(_borrow(lib, site=lib.site_b))
    assert result.error_code == "NO_COPY_AVAILABLE_AT_SITE"


async def test_borrow_when_every_copy_is_out(loans, library):
    lib = await library.seed(copies=1)
    assert (await loans.borrow_book(_borrow(lib))).success
    result = await loans.borrow_book(_borrow(lib))
    assert result.error_code == "NO_COPY_AVAILABLE_AT_SITE"


async def test_sixth_borrow_hits_limit(loans, library, catalog, test_db):
    lib = await library.seed(copies=6)
    for _ in range(5):
        assert (await loans.borrow_book(_borrow(lib))).success

    result = await loans.borrow_book(_borrow(lib))

    assert result.error_code == "BORROW_LIMIT_REACHED"
    available = [
        c for c in await catalog.copies_of_book(lib.book_id)
        if c.status == CopyStatus.AVAILABLE
    ]
    assert len(available) == 1
    user = await SqlUserRepository(test_db).get_by_id(lib.user_id)
    assert user.active_loans_count == 5


async def test_return_closes_loan(loans, library, clock, test_db):
    lib = await library.seed()
    loan_id = (await loans.borrow_book(_borrow(lib))).payload
    clock.advance(days=3)

    result = await loans.return_book(ReturnBookCommand(loan_id))

    assert result.success
    loan = await SqlLoanRepository(test_db).get_by_id(loan_id)
    assert loan.returned_at == clock.utc_now()
    copy = await SqlBookCopyRepository(test_db).get_by_id(lib.copy_ids[0])
    assert copy.status == CopyStatus.AVAILABLE
    user = await SqlUserRepository(test_db).get_by_id(lib.user_id)
    assert user.active_loans_count == 0
    assert user.amount_due == Decimal("0")


async def test_late_return_charges_penalty(loans, library, clock, test_db):
    lib = await library.seed()
    loan_id = (await loans.borrow_book(_borrow(lib))).payload
    clock.advance(days=17)

    await loans.return_book(ReturnBookCommand(loan_id))

    user = await SqlUserRepository(test_db).get_by_id(lib.user_id)
    assert user.amount_due == Decimal("1.5")


async def test_second_return_raises(loans, library):
    lib = await library.seed()
    loan_id = (await loans.borrow_book(_borrow(lib))).payload
    await loans.return_book(ReturnBookCommand(loan_id))

    with pytest.raises(InvalidStateError):
        await loans.return_book(ReturnBookCommand(loan_id))


async def test_return_unknown_loan(loans):
    result = await loans.return_book(ReturnBookCommand(uuid4()))
    assert result.error_code == "LOAN_NOT_FOUND"


async def test_borrow_returned_copy_again(loans, library, catalog):
    lib = await library.seed()
    loan_id = (await loans.borrow_book(_borrow(lib))).payload
    await loans.return_book(ReturnBookCommand(loan_id))

    again = await loans.borrow_book(_borrow(lib))

    assert again.success
    assert again.payload != loan_id


async def test_copy_added_later_is_borrowable(loans, library, catalog):
    lib = await library.seed(copies=0)
    assert (await loans.borrow_book(_borrow(lib))).error_code == "NO_COPY_AVAILABLE_AT_SITE"
    await catalog.add_book_copy(AddBookCopyCommand(lib.book_id, lib.site_a))
    assert (await loans.borrow_book(_borrow(lib))).success
