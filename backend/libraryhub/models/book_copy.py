"""BookCopy ORM — physical copies and their current site/status.

Invariants:
    - book_id and site_id always set (FK to books / sites)
    - status stores CopyStatus.value: available | borrowed | in_transfer
"""

import uuid

from sqlalchemy import String, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from libraryhub.db.base import Base


class BookCopyRow(Base):
    __tablename__ = "book_copies"
    __table_args__ = (
        Index("ix_book_copies_book_site_status", "book_id", "site_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("books.id"), nullable=False,
    )
    site_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sites.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="available",
    )
