"""UserAccount ORM — borrowers, their active-loan counter and balance.

Invariants:
    - amount_due is Numeric(12, 2) and may be negative (overpayment)
"""

import uuid
from decimal import Decimal

from sqlalchemy import String, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from libraryhub.db.base import Base


class UserAccountRow(Base):
    __tablename__ = "user_accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    active_loans_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    amount_due: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"),
    )
