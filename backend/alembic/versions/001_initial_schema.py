"""Initial schema — books, sites, book_copies, user_accounts, loans.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("isbn", sa.String(32), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(300), nullable=False),
    )
    op.create_index("ix_books_isbn", "books", ["isbn"])

    op.create_table(
        "sites",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
    )

    op.create_table(
        "book_copies",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("book_id", UUID(as_uuid=True), sa.ForeignKey("books.id"), nullable=False),
        sa.Column("site_id", UUID(as_uuid=True), sa.ForeignKey("sites.id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="available"),
    )
    op.create_index(
        "ix_book_copies_book_site_status", "book_copies",
        ["book_id", "site_id", "status"],
    )

    op.create_table(
        "user_accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("active_loans_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("amount_due", sa.Numeric(12, 2), nullable=False, server_default="0"),
    )

    op.create_table(
        "loans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_account_id", UUID(as_uuid=True), sa.ForeignKey("user_accounts.id"), nullable=False),
        sa.Column("book_copy_id", UUID(as_uuid=True), sa.ForeignKey("book_copies.id"), nullable=False),
        sa.Column("borrowed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("returned_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_loans_user_account_id", "loans", ["user_account_id"])
    op.create_index("ix_loans_book_copy_id", "loans", ["book_copy_id"])


def downgrade() -> None:
    op.drop_index("ix_loans_book_copy_id", table_name="loans")
    op.drop_index("ix_loans_user_account_id", table_name="loans")
    op.drop_table("loans")
    op.drop_table("user_accounts")
    op.drop_index("ix_book_copies_book_site_status", table_name="book_copies")
    op.drop_table("book_copies")
    op.drop_table("sites")
    op.drop_index("ix_books_isbn", table_name="books")
    op.drop_table("books")
