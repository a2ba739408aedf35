"""Transfer Handlers — request_transfer, receive_transfer, copies_in_transfer.

Invariants:
    - request_transfer: source == target fails SOURCE_AND_TARGET_MUST_DIFFER,
      checked before any lookup (so two nil ids fail the same way)
    - request_transfer picks the first AVAILABLE copy the repository returns
    - receive_transfer: COPY_NOT_FOUND, then COPY_NOT_IN_TRANSFER, then arrival
    - receive_transfer NEVER raises from arrival/persist: faults become failure
      results whose error_code is the fault's stable code

Design Decisions:
    - Fault containment only in receive_transfer; every other handler lets
      faults propagate to the global error handlers
    - LibraryError faults report their own code (INVALID_ARGUMENT,
      INVALID_STATE, DATABASE_ERROR, ...); any other exception is logged with
      traceback and reported as UNEXPECTED_ERROR
"""

import logging

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.domain_types import CopyStatus, ErrorCode
from libraryhub.core.errors import LibraryError
from libraryhub.core.guards import require_present
from libraryhub.core.repository_protocols import BookCopyRepository
from libraryhub.core.results import OperationResult
from libraryhub.services.commands import (
    ReceiveTransferCommand, RequestTransferCommand,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class TransferHandlers:
    """Moves copies between sites through the IN_TRANSFER state."""

    def __init__(self, copies: BookCopyRepository):
        require_present(copies, "copies")
        self._copies = copies

    async def request_transfer(self, command: RequestTransferCommand) -> OperationResult:
        """Put one available copy at the source site in transfer. Payload: copy id."""
        require_present(command, "command")
        if command.source_site_id == command.target_site_id:
            return OperationResult.fail(ErrorCode.SOURCE_AND_TARGET_MUST_DIFFER)

        copy = await self._copies.find_available_copy(
            command.book_id, command.source_site_id,
        )
        if copy is None:
            logger.info(
                "No copy available for transfer",
                extra={
                    "book_id": str(command.book_id),
                    "site_id": str(command.source_site_id),
                    "error_code": ErrorCode.NO_COPY_AVAILABLE_AT_SOURCE_SITE.value,
                },
            )
            return OperationResult.fail(ErrorCode.NO_COPY_AVAILABLE_AT_SOURCE_SITE)

        copy.mark_as_in_transfer()
        await self._copies.update(copy)
        logger.info(
            f"Copy {copy.id} in transfer to site {command.target_site_id}",
            extra={"book_copy_id": str(copy.id), "site_id": str(command.target_site_id)},
        )
        return OperationResult.ok(copy.id)

    async def receive_transfer(self, command: ReceiveTransferCommand) -> OperationResult:
        """Land an in-transfer copy at the target site. Payload: copy id."""
        require_present(command, "command")
        log_extra = {
            "book_copy_id": str(command.book_copy_id),
            "site_id": str(command.target_site_id),
        }

        copy = await self._copies.get_by_id(command.book_copy_id)
        if copy is None:
            return OperationResult.fail(ErrorCode.COPY_NOT_FOUND)
        if copy.status != CopyStatus.IN_TRANSFER:
            return OperationResult.fail(ErrorCode.COPY_NOT_IN_TRANSFER)

        try:
            copy.mark_as_arrived(command.target_site_id)
            await self._copies.update(copy)
        except LibraryError as e:
            logger.warning(
                f"Transfer receive failed: {e.message}",
                extra={**log_extra, "error_code": e.code},
            )
            return OperationResult.fail(e.code)
        except Exception:
            logger.error(
                "Unexpected fault while receiving transfer",
                extra={**log_extra, "error_code": UNEXPECTED_ERROR},
                exc_info=True,
            )
            return OperationResult.fail(UNEXPECTED_ERROR)

        logger.info(f"Copy {copy.id} arrived", extra=log_extra)
        return OperationResult.ok(copy.id)

    async def copies_in_transfer(self) -> list[BookCopy]:
        return await self._copies.get_by_status(CopyStatus.IN_TRANSFER)
