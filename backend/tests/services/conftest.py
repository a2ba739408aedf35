"""Service test fixtures — async DB, repositories, handlers, FastAPI client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Foreign keys are enforced on the test engine, as on PostgreSQL
    - get_db dependency overridden to use the test session factory
    - get_clock overridden with a FixedClock the test can advance
    - db_manager patched so the readiness probe sees the test engine
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import libraryhub.infrastructure.database as db_module
from libraryhub.api.dependencies import get_clock
from libraryhub.core.borrowing import BorrowingService
from libraryhub.core.penalty import PenaltyService
from libraryhub.core.returning import ReturnService
from libraryhub.db.session import create_all_tables, drop_all_tables
from libraryhub.infrastructure.clock import FixedClock
from libraryhub.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from libraryhub.infrastructure.repositories import (
    SqlBookCopyRepository, SqlBookRepository, SqlLoanRepository,
    SqlSiteRepository, SqlUserRepository,
)
from libraryhub.main import app
from libraryhub.services.handle_accounts import AccountHandlers
from libraryhub.services.handle_catalog import CatalogHandlers
from libraryhub.services.handle_loans import LoanHandlers
from libraryhub.services.handle_transfers import TransferHandlers
from libraryhub.services.commands import (
    AddBookCopyCommand, CreateSiteCommand, RegisterBookCommand,
    RegisterUserCommand,
)

T0 = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)
    await create_all_tables(engine)
    yield engine
    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock(T0)


# ─── Handlers over the test session ─────────────────────────────

@pytest.fixture
def catalog(test_db):
    return CatalogHandlers(
        SqlBookRepository(test_db), SqlSiteRepository(test_db),
        SqlBookCopyRepository(test_db),
    )


@pytest.fixture
def accounts(test_db, clock):
    return AccountHandlers(
        users=SqlUserRepository(test_db),
        loans=SqlLoanRepository(test_db),
        copies=SqlBookCopyRepository(test_db),
        books=SqlBookRepository(test_db),
        sites=SqlSiteRepository(test_db),
        clock=clock,
    )


@pytest.fixture
def loans(test_db, clock):
    return LoanHandlers(
        users=SqlUserRepository(test_db),
        copies=SqlBookCopyRepository(test_db),
        loans=SqlLoanRepository(test_db),
        clock=clock,
        borrowing_service=BorrowingService(),
        return_service=ReturnService(PenaltyService()),
    )


@pytest.fixture
def transfers(test_db):
    return TransferHandlers(SqlBookCopyRepository(test_db))


# ─── HTTP client ────────────────────────────────────────────────

@pytest.fixture
async def client(test_engine, test_session_factory, clock):
    """FastAPI test client with DB and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    previous_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = previous_manager


@pytest.fixture
def library(catalog, accounts, test_db):
    """Seed helper: two sites, one book, n copies at the first site, one user."""

    class _Library:
        async def seed(self, copies: int = 1):
            book = RegisterBookCommand(
                isbn="978-0441013593", title="Dune", author="Frank Herbert",
            )
            self.book_id = (await catalog.register_book(book)).payload
            self.site_a = (await catalog.create_site(CreateSiteCommand("North"))).payload
            self.site_b = (await catalog.create_site(CreateSiteCommand("South"))).payload
            self.copy_ids = []
            for _ in range(copies):
                result = await catalog.add_book_copy(
                    AddBookCopyCommand(book_id=self.book_id, site_id=self.site_a),
                )
                self.copy_ids.append(result.payload)
            self.user_id = (await accounts.register_user(RegisterUserCommand("Ada"))).payload
            await test_db.commit()
            return self

    return _Library()
