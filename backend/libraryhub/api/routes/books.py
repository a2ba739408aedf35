"""Book Routes — catalog registration, listing, and copy management.

Invariants:
    - POST answers OperationResponse; 201 on success
    - Copy listing for an unknown book is a 404 (RESOURCE_NOT_FOUND)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.api.dependencies import get_catalog_handlers
from libraryhub.api.routes.result_response import commit_result
from libraryhub.core.errors import ResourceNotFoundError
from libraryhub.infrastructure.database import get_db
from libraryhub.schemas.requests import BookCopyCreate, BookCreate
from libraryhub.schemas.responses import (
    BookCopyResponse, BookResponse, OperationResponse,
)
from libraryhub.services.commands import AddBookCopyCommand, RegisterBookCommand
from libraryhub.services.handle_catalog import CatalogHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/books", tags=["books"])


@router.post("", response_model=OperationResponse, status_code=201)
async def register_book(
    body: BookCreate,
    db: AsyncSession = Depends(get_db),
    handlers: CatalogHandlers = Depends(get_catalog_handlers),
):
    """Register a title in the catalog."""
    result = await handlers.register_book(
        RegisterBookCommand(isbn=body.isbn, title=body.title, author=body.author),
    )
    return await commit_result(db, result, created=True)


@router.get("", response_model=list[BookResponse])
async def list_books(handlers: CatalogHandlers = Depends(get_catalog_handlers)):
    books = await handlers.list_books()
    return [
        BookResponse(id=b.id, isbn=b.isbn, title=b.title, author=b.author)
        for b in books
    ]


@router.post("/{book_id}/copies", response_model=OperationResponse, status_code=201)
async def add_book_copy(
    book_id: UUID,
    body: BookCopyCreate,
    db: AsyncSession = Depends(get_db),
    handlers: CatalogHandlers = Depends(get_catalog_handlers),
):
    """Add a physical copy of a book at a site."""
    result = await handlers.add_book_copy(
        AddBookCopyCommand(book_id=book_id, site_id=body.site_id),
    )
    return await commit_result(db, result, created=True)


@router.get("/{book_id}/copies", response_model=list[BookCopyResponse])
async def list_book_copies(
    book_id: UUID, handlers: CatalogHandlers = Depends(get_catalog_handlers),
):
    copies = await handlers.copies_of_book(book_id)
    if copies is None:
        raise ResourceNotFoundError("Book", str(book_id))
    return [
        BookCopyResponse(
            id=c.id, book_id=c.book_id, site_id=c.site_id, status=c.status.value,
        )
        for c in copies
    ]
