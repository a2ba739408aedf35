"""Result Response — turns an OperationResult into a committed HTTP response.

Invariants:
    - success  -> COMMIT, then 200 (201 when created=True)
    - failure  -> ROLLBACK, then 404 for *_NOT_FOUND codes, else 400
    - Body is always OperationResponse-shaped
"""

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.core.results import OperationResult
from libraryhub.schemas.responses import OperationResponse


def failure_status(error_code: str | None) -> int:
    if error_code and error_code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


async def commit_result(
    db: AsyncSession, result: OperationResult, created: bool = False,
) -> JSONResponse:
    if result.success:
        await db.commit()
        code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    else:
        await db.rollback()
        code = failure_status(result.error_code)

    body = OperationResponse(
        success=result.success, error_code=result.error_code, id=result.payload,
    )
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))
