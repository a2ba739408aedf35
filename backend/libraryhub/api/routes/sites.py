"""Site Routes — branch creation, listing, and per-site inventory."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.api.dependencies import get_account_handlers, get_catalog_handlers
from libraryhub.api.routes.result_response import commit_result
from libraryhub.core.errors import ResourceNotFoundError
from libraryhub.infrastructure.database import get_db
from libraryhub.schemas.requests import SiteCreate
from libraryhub.schemas.responses import (
    OperationResponse, SiteBookSummaryResponse, SiteResponse,
)
from libraryhub.services.commands import CreateSiteCommand
from libraryhub.services.handle_accounts import AccountHandlers
from libraryhub.services.handle_catalog import CatalogHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sites", tags=["sites"])


@router.post("", response_model=OperationResponse, status_code=201)
async def create_site(
    body: SiteCreate,
    db: AsyncSession = Depends(get_db),
    handlers: CatalogHandlers = Depends(get_catalog_handlers),
):
    result = await handlers.create_site(
        CreateSiteCommand(name=body.name, address=body.address),
    )
    return await commit_result(db, result, created=True)


@router.get("", response_model=list[SiteResponse])
async def list_sites(handlers: CatalogHandlers = Depends(get_catalog_handlers)):
    return [
        SiteResponse(id=s.id, name=s.name, address=s.address)
        for s in await handlers.list_sites()
    ]


@router.get("/{site_id}/inventory", response_model=list[SiteBookSummaryResponse])
async def site_inventory(
    site_id: UUID, handlers: AccountHandlers = Depends(get_account_handlers),
):
    """Copies per book at this site, split by status."""
    rows = await handlers.site_inventory(site_id)
    if rows is None:
        raise ResourceNotFoundError("Site", str(site_id))
    return [
        SiteBookSummaryResponse(
            book_id=r.book_id,
            title=r.title,
            total_copies=r.total_copies,
            available_copies=r.available_copies,
            borrowed_copies=r.borrowed_copies,
            in_transfer_copies=r.in_transfer_copies,
        )
        for r in rows
    ]
