"""Transfer Routes — request, list, and receive inter-site transfers.

Invariants:
    - A request for `quantity` copies is all-or-nothing: the first failure
      rolls back every copy already put in transfer by this request
    - Receive always answers an OperationResponse, also when the arrival
      itself faulted (error_code carries the fault code)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.api.dependencies import get_transfer_handlers
from libraryhub.api.routes.result_response import commit_result, failure_status
from libraryhub.infrastructure.database import get_db
from libraryhub.schemas.requests import ReceiveTransferRequest, TransferRequest
from libraryhub.schemas.responses import (
    BookCopyResponse, OperationResponse, TransferBatchResponse,
)
from libraryhub.services.commands import (
    ReceiveTransferCommand, RequestTransferCommand,
)
from libraryhub.services.handle_transfers import TransferHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/transfers", tags=["transfers"])


@router.post("", response_model=TransferBatchResponse)
async def request_transfer(
    body: TransferRequest,
    db: AsyncSession = Depends(get_db),
    handlers: TransferHandlers = Depends(get_transfer_handlers),
):
    """Put `quantity` available copies of a book in transfer."""
    command = RequestTransferCommand(
        book_id=body.book_id,
        source_site_id=body.source_site_id,
        target_site_id=body.target_site_id,
    )
    copy_ids: list[UUID] = []
    for _ in range(body.quantity):
        result = await handlers.request_transfer(command)
        if not result.success:
            await db.rollback()
            logger.info(
                f"Transfer request refused after {len(copy_ids)} copies",
                extra={"book_id": str(body.book_id), "error_code": result.error_code},
            )
            payload = TransferBatchResponse(success=False, error_code=result.error_code)
            return JSONResponse(
                status_code=failure_status(result.error_code),
                content=payload.model_dump(mode="json"),
            )
        copy_ids.append(result.payload)

    await db.commit()
    payload = TransferBatchResponse(success=True, id=copy_ids[-1], copy_ids=copy_ids)
    return JSONResponse(
        status_code=status.HTTP_200_OK, content=payload.model_dump(mode="json"),
    )


@router.get("", response_model=list[BookCopyResponse])
async def list_copies_in_transfer(
    handlers: TransferHandlers = Depends(get_transfer_handlers),
):
    return [
        BookCopyResponse(
            id=c.id, book_id=c.book_id, site_id=c.site_id, status=c.status.value,
        )
        for c in await handlers.copies_in_transfer()
    ]


@router.post("/{book_copy_id}/receive", response_model=OperationResponse)
async def receive_transfer(
    book_copy_id: UUID,
    body: ReceiveTransferRequest,
    db: AsyncSession = Depends(get_db),
    handlers: TransferHandlers = Depends(get_transfer_handlers),
):
    result = await handlers.receive_transfer(
        ReceiveTransferCommand(
            book_copy_id=book_copy_id, target_site_id=body.target_site_id,
        ),
    )
    return await commit_result(db, result)
