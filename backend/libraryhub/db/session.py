"""Schema bootstrap — creates mapped tables without Alembic.

Invariants:
    - Imports every model before create_all so Base.metadata is complete
    - Used for SQLite (local runs, tests); PostgreSQL schema comes from Alembic
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from libraryhub.db.base import Base


async def create_all_tables(engine: AsyncEngine) -> None:
    import libraryhub.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
