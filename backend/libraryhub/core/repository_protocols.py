"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Repositories are id-keyed stores of domain entities: get_* returns a fresh
      entity, add/update write it back. No object graph between aggregates.

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the domain services that
      act on the loaded entities are never async themselves. Handlers in
      services/ orchestrate the awaits around the pure logic.
    - Clock is synchronous: reading time is not IO
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.catalog import Book, Site
from libraryhub.core.domain_types import CopyStatus
from libraryhub.core.loan import Loan
from libraryhub.core.user_account import UserAccount


class Clock(Protocol):
    """Source of the current timestamp (timezone-aware UTC)."""
    def utc_now(self) -> datetime: ...


class BookRepository(Protocol):
    async def get_by_id(self, book_id: UUID) -> Book | None: ...
    async def get_all(self) -> list[Book]: ...
    async def add(self, book: Book) -> None: ...


class SiteRepository(Protocol):
    async def get_by_id(self, site_id: UUID) -> Site | None: ...
    async def get_all(self) -> list[Site]: ...
    async def add(self, site: Site) -> None: ...


class UserRepository(Protocol):
    async def get_by_id(self, user_id: UUID) -> UserAccount | None: ...
    async def get_all(self) -> list[UserAccount]: ...
    async def add(self, user: UserAccount) -> None: ...
    async def update(self, user: UserAccount) -> None: ...


class BookCopyRepository(Protocol):
    async def get_by_id(self, copy_id: UUID) -> BookCopy | None: ...
    async def find_available_copy(
        self, book_id: UUID, site_id: UUID,
    ) -> BookCopy | None: ...
    async def get_by_book(self, book_id: UUID) -> list[BookCopy]: ...
    async def get_by_site(self, site_id: UUID) -> list[BookCopy]: ...
    async def get_by_status(self, status: CopyStatus) -> list[BookCopy]: ...
    async def add(self, copy: BookCopy) -> None: ...
    async def update(self, copy: BookCopy) -> None: ...


class LoanRepository(Protocol):
    async def get_by_id(self, loan_id: UUID) -> Loan | None: ...
    async def get_active_loans_for_user(self, user_id: UUID) -> list[Loan]: ...
    async def get_active_loan_for_user_and_copy(
        self, user_id: UUID, book_copy_id: UUID,
    ) -> Loan | None: ...
    async def get_loans_for_user(self, user_id: UUID) -> list[Loan]: ...
    async def add(self, loan: Loan) -> None: ...
    async def update(self, loan: Loan) -> None: ...
