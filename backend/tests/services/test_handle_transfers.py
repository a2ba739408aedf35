"""Transfer Handlers — request, receive and fault containment.

Tests:
    - Same source and target -> SOURCE_AND_TARGET_MUST_DIFFER before any lookup
    - Request puts one AVAILABLE copy IN_TRANSFER; none left -> NO_COPY_AVAILABLE_AT_SOURCE_SITE
    - Receive: COPY_NOT_FOUND, COPY_NOT_IN_TRANSFER, success moves the site
    - Receive never raises: domain faults report their code, anything else
      reports UNEXPECTED_ERROR
    - Receive at a site that does not exist fails with DATABASE_ERROR and
      leaves the copy in transfer at its old site
"""

from uuid import uuid4

import pytest

from libraryhub.core.book_copy import BookCopy
from libraryhub.core.domain_types import NIL_ID, CopyStatus
from libraryhub.core.errors import DatabaseError
from libraryhub.infrastructure.repositories import SqlBookCopyRepository
from libraryhub.services.commands import (
    ReceiveTransferCommand, RequestTransferCommand,
)
from libraryhub.services.handle_transfers import TransferHandlers


def _request(lib) -> RequestTransferCommand:
    return RequestTransferCommand(
        book_id=lib.book_id, source_site_id=lib.site_a, target_site_id=lib.site_b,
    )


async def test_same_source_and_target(transfers):
    site = uuid4()
    result = await transfers.request_transfer(
        RequestTransferCommand(book_id=uuid4(), source_site_id=site, target_site_id=site),
    )
    assert result.error_code == "SOURCE_AND_TARGET_MUST_DIFFER"


async def test_nil_sites_fail_the_same_way(transfers):
    result = await transfers.request_transfer(
        RequestTransferCommand(book_id=uuid4(), source_site_id=NIL_ID, target_site_id=NIL_ID),
    )
    assert result.error_code == "SOURCE_AND_TARGET_MUST_DIFFER"


async def test_request_puts_copy_in_transfer(transfers, library, test_db):
    lib = await library.seed()

    result = await transfers.request_transfer(_request(lib))

    assert result.payload == lib.copy_ids[0]
    copy = await SqlBookCopyRepository(test_db).get_by_id(lib.copy_ids[0])
    assert copy.status == CopyStatus.IN_TRANSFER
    assert copy.site_id == lib.site_a
    assert [c.id for c in await transfers.copies_in_transfer()] == [copy.id]


async def test_request_without_available_copy(transfers, library):
    lib = await library.seed()
    await transfers.request_transfer(_request(lib))
    result = await transfers.request_transfer(_request(lib))
    assert result.error_code == "NO_COPY_AVAILABLE_AT_SOURCE_SITE"


async def test_receive_moves_copy(transfers, library, test_db):
    lib = await library.seed()
    copy_id = (await transfers.request_transfer(_request(lib))).payload

    result = await transfers.receive_transfer(ReceiveTransferCommand(copy_id, lib.site_b))

    assert result.success
    copy = await SqlBookCopyRepository(test_db).get_by_id(copy_id)
    assert copy.status == CopyStatus.AVAILABLE
    assert copy.site_id == lib.site_b


async def test_receive_unknown_copy(transfers):
    result = await transfers.receive_transfer(ReceiveTransferCommand(uuid4(), uuid4()))
    assert result.error_code == "COPY_NOT_FOUND"


async def test_receive_copy_not_in_transfer(transfers, library):
    lib = await library.seed()
    result = await transfers.receive_transfer(
        ReceiveTransferCommand(lib.copy_ids[0], lib.site_b),
    )
    assert result.error_code == "COPY_NOT_IN_TRANSFER"


async def test_receive_with_nil_target_reports_invalid_argument(transfers, library, test_db):
    lib = await library.seed()
    copy_id = (await transfers.request_transfer(_request(lib))).payload

    result = await transfers.receive_transfer(ReceiveTransferCommand(copy_id, NIL_ID))

    assert not result.success
    assert result.error_code == "INVALID_ARGUMENT"
    copy = await SqlBookCopyRepository(test_db).get_by_id(copy_id)
    assert copy.status == CopyStatus.IN_TRANSFER


async def test_receive_at_unknown_site_fails(transfers, library, test_db):
    lib = await library.seed()
    copy_id = (await transfers.request_transfer(_request(lib))).payload
    await test_db.commit()

    result = await transfers.receive_transfer(ReceiveTransferCommand(copy_id, uuid4()))

    assert not result.success
    assert result.error_code == "DATABASE_ERROR"
    await test_db.rollback()
    copy = await SqlBookCopyRepository(test_db).get_by_id(copy_id)
    assert copy.status == CopyStatus.IN_TRANSFER
    assert copy.site_id == lib.site_a


# ─── Fault containment ───────────────────────────────────────────

class _FailingCopies:
    """In-transfer copy whose update raises the configured exception."""

    def __init__(self, error: Exception):
        self.copy = BookCopy(book_id=uuid4(), site_id=uuid4())
        self.copy.mark_as_in_transfer()
        self._error = error

    async def get_by_id(self, copy_id):
        return self.copy if copy_id == self.copy.id else None

    async def update(self, copy):
        raise self._error


@pytest.mark.parametrize("error, code", [
    (DatabaseError("OperationalError", "update book copy"), "DATABASE_ERROR"),
    (KeyError("boom"), "UNEXPECTED_ERROR"),
])
async def test_receive_contains_persistence_faults(error, code):
    copies = _FailingCopies(error)
    handlers = TransferHandlers(copies)

    result = await handlers.receive_transfer(
        ReceiveTransferCommand(copies.copy.id, uuid4()),
    )

    assert not result.success
    assert result.error_code == code
    assert result.payload is None
