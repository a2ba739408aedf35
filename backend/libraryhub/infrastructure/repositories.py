"""SQL Repositories — AsyncSession implementations of core repository protocols.

Invariants:
    - Every get_* returns a NEW domain entity built from the row; mutating it
      has no effect until update() writes it back
    - add/update flush but never commit; the route owns the transaction
    - Datetimes read back are timezone-aware UTC (SQLite drops tzinfo)
    - SQLAlchemy failures during flush surface as DatabaseError

Design Decisions:
    - Row <-> entity mapping kept here so core/ never sees ORM classes
    - find_available_copy returns the first match in storage order; no tie-break
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.catalog import Book, Site
from libraryhub.core.domain_types import CopyStatus
from libraryhub.core.errors import DatabaseError, ResourceNotFoundError
from libraryhub.core.loan import Loan
from libraryhub.core.user_account import UserAccount
from libraryhub.models.book import BookRow
from libraryhub.models.book_copy import BookCopyRow
from libraryhub.models.loan import LoanRow
from libraryhub.models.site import SiteRow
from libraryhub.models.user_account import UserAccountRow


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


async def _flush(db: AsyncSession, operation: str) -> None:
    try:
        await db.flush()
    except SQLAlchemyError as e:
        raise DatabaseError(str(e.__class__.__name__), operation) from e


class _SqlRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def _get_row(self, model: type, row_id: UUID, resource: str):
        row = await self._db.get(model, row_id)
        if row is None:
            raise ResourceNotFoundError(resource, str(row_id))
        return row


# ─── Catalog ─────────────────────────────────────────────────────

def _to_book(row: BookRow) -> Book:
    return Book(isbn=row.isbn, title=row.title, author=row.author, id=row.id)


def _to_site(row: SiteRow) -> Site:
    return Site(name=row.name, address=row.address, id=row.id)


class SqlBookRepository(_SqlRepository):

    async def get_by_id(self, book_id: UUID) -> Book | None:
        row = await self._db.get(BookRow, book_id)
        return _to_book(row) if row else None

    async def get_all(self) -> list[Book]:
        result = await self._db.execute(select(BookRow).order_by(BookRow.title))
        return [_to_book(r) for r in result.scalars().all()]

    async def add(self, book: Book) -> None:
        self._db.add(BookRow(
            id=book.id, isbn=book.isbn, title=book.title, author=book.author,
        ))
        await _flush(self._db, "insert book")


class SqlSiteRepository(_SqlRepository):

    async def get_by_id(self, site_id: UUID) -> Site | None:
        row = await self._db.get(SiteRow, site_id)
        return _to_site(row) if row else None

    async def get_all(self) -> list[Site]:
        result = await self._db.execute(select(SiteRow).order_by(SiteRow.name))
        return [_to_site(r) for r in result.scalars().all()]

    async def add(self, site: Site) -> None:
        self._db.add(SiteRow(id=site.id, name=site.name, address=site.address))
        await _flush(self._db, "insert site")


# ─── Users ───────────────────────────────────────────────────────

def _to_user(row: UserAccountRow) -> UserAccount:
    return UserAccount(
        name=row.name,
        id=row.id,
        active_loans_count=row.active_loans_count,
        amount_due=Decimal(row.amount_due),
    )


class SqlUserRepository(_SqlRepository):

    async def get_by_id(self, user_id: UUID) -> UserAccount | None:
        row = await self._db.get(UserAccountRow, user_id)
        return _to_user(row) if row else None

    async def get_all(self) -> list[UserAccount]:
        result = await self._db.execute(
            select(UserAccountRow).order_by(UserAccountRow.name),
        )
        return [_to_user(r) for r in result.scalars().all()]

    async def add(self, user: UserAccount) -> None:
        self._db.add(UserAccountRow(
            id=user.id,
            name=user.name,
            active_loans_count=user.active_loans_count,
            amount_due=user.amount_due,
        ))
        await _flush(self._db, "insert user")

    async def update(self, user: UserAccount) -> None:
        row = await self._get_row(UserAccountRow, user.id, "UserAccount")
        row.name = user.name
        row.active_loans_count = user.active_loans_count
        row.amount_due = user.amount_due
        await _flush(self._db, "update user")


# ─── Copies ──────────────────────────────────────────────────────

def _to_copy(row: BookCopyRow) -> BookCopy:
    return BookCopy(
        book_id=row.book_id,
        site_id=row.site_id,
        id=row.id,
        status=CopyStatus(row.status),
    )


class SqlBookCopyRepository(_SqlRepository):

    async def get_by_id(self, copy_id: UUID) -> BookCopy | None:
        row = await self._db.get(BookCopyRow, copy_id)
        return _to_copy(row) if row else None

    async def find_available_copy(
        self, book_id: UUID, site_id: UUID,
    ) -> BookCopy | None:
        result = await self._db.execute(
            select(BookCopyRow)
            .where(
                BookCopyRow.book_id == book_id,
                BookCopyRow.site_id == site_id,
                BookCopyRow.status == CopyStatus.AVAILABLE.value,
            )
            .limit(1),
        )
        row = result.scalars().first()
        return _to_copy(row) if row else None

    async def get_by_book(self, book_id: UUID) -> list[BookCopy]:
        return await self._select(BookCopyRow.book_id == book_id)

    async def get_by_site(self, site_id: UUID) -> list[BookCopy]:
        return await self._select(BookCopyRow.site_id == site_id)

    async def get_by_status(self, status: CopyStatus) -> list[BookCopy]:
        return await self._select(BookCopyRow.status == status.value)

    async def add(self, copy: BookCopy) -> None:
        self._db.add(BookCopyRow(
            id=copy.id,
            book_id=copy.book_id,
            site_id=copy.site_id,
            status=copy.status.value,
        ))
        await _flush(self._db, "insert book copy")

    async def update(self, copy: BookCopy) -> None:
        row = await self._get_row(BookCopyRow, copy.id, "BookCopy")
        row.site_id = copy.site_id
        row.status = copy.status.value
        await _flush(self._db, "update book copy")

    async def _select(self, condition) -> list[BookCopy]:
        result = await self._db.execute(select(BookCopyRow).where(condition))
        return [_to_copy(r) for r in result.scalars().all()]


# ─── Loans ───────────────────────────────────────────────────────

def _to_loan(row: LoanRow) -> Loan:
    return Loan(
        borrowed_at=_as_utc(row.borrowed_at),
        due_date=_as_utc(row.due_date),
        user_account_id=row.user_account_id,
        book_copy_id=row.book_copy_id,
        id=row.id,
        returned_at=_as_utc(row.returned_at),
    )


class SqlLoanRepository(_SqlRepository):

    async def get_by_id(self, loan_id: UUID) -> Loan | None:
        row = await self._db.get(LoanRow, loan_id)
        return _to_loan(row) if row else None

    async def get_active_loans_for_user(self, user_id: UUID) -> list[Loan]:
        result = await self._db.execute(
            select(LoanRow)
            .where(
                LoanRow.user_account_id == user_id,
                LoanRow.returned_at.is_(None),
            )
            .order_by(LoanRow.borrowed_at),
        )
        return [_to_loan(r) for r in result.scalars().all()]

    async def get_active_loan_for_user_and_copy(
        self, user_id: UUID, book_copy_id: UUID,
    ) -> Loan | None:
        result = await self._db.execute(
            select(LoanRow).where(
                LoanRow.user_account_id == user_id,
                LoanRow.book_copy_id == book_copy_id,
                LoanRow.returned_at.is_(None),
            ),
        )
        row = result.scalars().first()
        return _to_loan(row) if row else None

    async def get_loans_for_user(self, user_id: UUID) -> list[Loan]:
        result = await self._db.execute(
            select(LoanRow)
            .where(LoanRow.user_account_id == user_id)
            .order_by(LoanRow.borrowed_at.desc()),
        )
        return [_to_loan(r) for r in result.scalars().all()]

    async def add(self, loan: Loan) -> None:
        self._db.add(LoanRow(
            id=loan.id,
            user_account_id=loan.user_account_id,
            book_copy_id=loan.book_copy_id,
            borrowed_at=loan.borrowed_at,
            due_date=loan.due_date,
            returned_at=loan.returned_at,
        ))
        await _flush(self._db, "insert loan")

    async def update(self, loan: Loan) -> None:
        row = await self._get_row(LoanRow, loan.id, "Loan")
        row.returned_at = loan.returned_at
        await _flush(self._db, "update loan")
