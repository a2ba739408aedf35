"""Catalog Handlers — register_book, create_site, add_book_copy.

Invariants:
    - Blank book fields -> INVALID_BOOK_DATA, blank site name -> INVALID_SITE_NAME
      (returned, never raised)
    - add_book_copy requires both the book and the site to exist
    - New copies start AVAILABLE
"""

import logging
from uuid import UUID

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.catalog import Book, Site
from libraryhub.core.domain_types import ErrorCode
from libraryhub.core.guards import require_present
from libraryhub.core.repository_protocols import (
    BookCopyRepository, BookRepository, SiteRepository,
)
from libraryhub.core.results import OperationResult
from libraryhub.services.commands import (
    AddBookCopyCommand, CreateSiteCommand, RegisterBookCommand,
)

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CatalogHandlers:
    """Books, sites and copies. Each method returns OperationResult[UUID]."""

    def __init__(
        self,
        books: BookRepository,
        sites: SiteRepository,
        copies: BookCopyRepository,
    ):
        self._books = books
        self._sites = sites
        self._copies = copies

    async def register_book(self, command: RegisterBookCommand) -> OperationResult:
        require_present(command, "command")
        if any(_is_blank(v) for v in (command.isbn, command.title, command.author)):
            return OperationResult.fail(ErrorCode.INVALID_BOOK_DATA)

        book = Book(isbn=command.isbn, title=command.title, author=command.author)
        await self._books.add(book)
        logger.info(f"Book registered: {book.title}", extra={"book_id": str(book.id)})
        return OperationResult.ok(book.id)

    async def create_site(self, command: CreateSiteCommand) -> OperationResult:
        require_present(command, "command")
        if _is_blank(command.name):
            return OperationResult.fail(ErrorCode.INVALID_SITE_NAME)

        site = Site(name=command.name, address=command.address)
        await self._sites.add(site)
        logger.info(f"Site created: {site.name}", extra={"site_id": str(site.id)})
        return OperationResult.ok(site.id)

    async def add_book_copy(self, command: AddBookCopyCommand) -> OperationResult:
        require_present(command, "command")
        if await self._books.get_by_id(command.book_id) is None:
            return OperationResult.fail(ErrorCode.BOOK_NOT_FOUND)
        if await self._sites.get_by_id(command.site_id) is None:
            return OperationResult.fail(ErrorCode.SITE_NOT_FOUND)

        copy = BookCopy(book_id=command.book_id, site_id=command.site_id)
        await self._copies.add(copy)
        return OperationResult.ok(copy.id)

    async def list_books(self) -> list[Book]:
        return await self._books.get_all()

    async def list_sites(self) -> list[Site]:
        return await self._sites.get_all()

    async def copies_of_book(self, book_id: UUID) -> list[BookCopy] | None:
        """All copies of a book, any site and status. None if the book is unknown."""
        if await self._books.get_by_id(book_id) is None:
            return None
        return await self._copies.get_by_book(book_id)
