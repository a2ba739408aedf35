"""SQL Repositories — mapping, queries and write-back.

Tests:
    - Entities read back are fresh copies; changes need update()
    - Datetimes come back timezone-aware UTC
    - Active-loan queries ignore returned loans
    - update() of an unknown id raises ResourceNotFoundError
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.catalog import Book, Site
from libraryhub.core.domain_types import CopyStatus
from libraryhub.core.errors import ResourceNotFoundError
from libraryhub.core.loan import Loan
from libraryhub.core.user_account import UserAccount
from libraryhub.infrastructure.repositories import (
    SqlBookCopyRepository, SqlBookRepository, SqlLoanRepository,
    SqlSiteRepository, SqlUserRepository, _as_utc,
)

T0 = datetime(2026, 5, 4, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
async def stored(test_db):
    """One book, one site, two copies, one user with a returned and an active loan."""
    book = Book(isbn="1", title="Dune", author="Herbert")
    site = Site(name="North")
    await SqlBookRepository(test_db).add(book)
    await SqlSiteRepository(test_db).add(site)
    copies = [BookCopy(book_id=book.id, site_id=site.id) for _ in range(2)]
    for copy in copies:
        await SqlBookCopyRepository(test_db).add(copy)
    user = UserAccount(name="Ada")
    await SqlUserRepository(test_db).add(user)

    old = Loan(T0, T0 + timedelta(days=14), user.id, copies[0].id)
    old.mark_as_returned(T0 + timedelta(days=2))
    current = Loan(T0 + timedelta(days=3), T0 + timedelta(days=17), user.id, copies[1].id)
    loans = SqlLoanRepository(test_db)
    await loans.add(old)
    await loans.add(current)
    await test_db.commit()
    return {"book": book, "site": site, "copies": copies, "user": user,
            "old": old, "current": current}


def test_as_utc():
    naive = datetime(2026, 1, 1, 12, 0)
    assert _as_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert _as_utc(None) is None


async def test_user_round_trip_needs_update(test_db, stored):
    users = SqlUserRepository(test_db)
    user = await users.get_by_id(stored["user"].id)
    user.add_amount(Decimal("2.5"))
    await users.update(user)

    assert (await users.get_by_id(user.id)).amount_due == Decimal("2.5")
    assert [u.name for u in await users.get_all()] == ["Ada"]


async def test_copy_queries(test_db, stored):
    repo = SqlBookCopyRepository(test_db)
    copy = await repo.get_by_id(stored["copies"][0].id)
    copy.mark_as_in_transfer()
    await repo.update(copy)

    assert [c.id for c in await repo.get_by_status(CopyStatus.IN_TRANSFER)] == [copy.id]
    assert len(await repo.get_by_book(stored["book"].id)) == 2
    assert len(await repo.get_by_site(stored["site"].id)) == 2
    available = await repo.find_available_copy(stored["book"].id, stored["site"].id)
    assert available.id == stored["copies"][1].id


async def test_active_loan_queries(test_db, stored):
    repo = SqlLoanRepository(test_db)
    user_id = stored["user"].id

    active = await repo.get_active_loans_for_user(user_id)
    assert [loan.id for loan in active] == [stored["current"].id]
    assert await repo.get_active_loan_for_user_and_copy(
        user_id, stored["copies"][0].id,
    ) is None
    found = await repo.get_active_loan_for_user_and_copy(user_id, stored["copies"][1].id)
    assert found.id == stored["current"].id
    history = await repo.get_loans_for_user(user_id)
    assert [loan.id for loan in history] == [stored["current"].id, stored["old"].id]


async def test_loan_datetimes_are_aware(test_db, stored):
    test_db.expunge_all()
    loan = await SqlLoanRepository(test_db).get_by_id(stored["old"].id)
    assert loan.borrowed_at == T0
    assert loan.returned_at.tzinfo is not None


async def test_update_unknown_row_raises(test_db):
    with pytest.raises(ResourceNotFoundError):
        await SqlUserRepository(test_db).update(UserAccount(name="Nobody"))
