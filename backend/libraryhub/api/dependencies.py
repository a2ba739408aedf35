"""Handler Wiring — FastAPI dependencies that build handlers per request.

Invariants:
    - One AsyncSession per request, shared by every repository of that request
    - Clock is a dependency so tests can freeze time (dependency_overrides)
    - Domain services are stateless; built fresh, no module-level singletons
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from libraryhub.config import Settings, get_settings
from libraryhub.core.borrowing import BorrowingService
from libraryhub.core.penalty import PenaltyService
from libraryhub.core.repository_protocols import Clock
from libraryhub.core.returning import ReturnService
from libraryhub.infrastructure.clock import SystemClock
from libraryhub.infrastructure.database import get_db
from libraryhub.infrastructure.repositories import (
    SqlBookCopyRepository, SqlBookRepository, SqlLoanRepository,
    SqlSiteRepository, SqlUserRepository,
)
from libraryhub.services.handle_accounts import AccountHandlers
from libraryhub.services.handle_catalog import CatalogHandlers
from libraryhub.services.handle_loans import LoanHandlers
from libraryhub.services.handle_transfers import TransferHandlers


def get_clock() -> Clock:
    return SystemClock()


def get_catalog_handlers(db: AsyncSession = Depends(get_db)) -> CatalogHandlers:
    return CatalogHandlers(
        SqlBookRepository(db), SqlSiteRepository(db), SqlBookCopyRepository(db),
    )


def get_account_handlers(
    db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock),
) -> AccountHandlers:
    return AccountHandlers(
        users=SqlUserRepository(db),
        loans=SqlLoanRepository(db),
        copies=SqlBookCopyRepository(db),
        books=SqlBookRepository(db),
        sites=SqlSiteRepository(db),
        clock=clock,
    )


def get_loan_handlers(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> LoanHandlers:
    return LoanHandlers(
        users=SqlUserRepository(db),
        copies=SqlBookCopyRepository(db),
        loans=SqlLoanRepository(db),
        clock=clock,
        borrowing_service=BorrowingService(),
        return_service=ReturnService(PenaltyService()),
        loan_period_days=settings.loan_period_days,
        daily_rate=settings.daily_penalty_rate,
    )


def get_transfer_handlers(db: AsyncSession = Depends(get_db)) -> TransferHandlers:
    return TransferHandlers(SqlBookCopyRepository(db))
