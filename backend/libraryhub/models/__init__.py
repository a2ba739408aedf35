"""ORM Models — SQLAlchemy declarative models, one file per table.

Invariants:
    - All models inherit from Base (db/base.py)
    - Aggregates reference each other by foreign-key id only; no relationship()
      navigation, repositories load each aggregate independently
"""

from libraryhub.models.book import BookRow  # noqa: F401
from libraryhub.models.site import SiteRow  # noqa: F401
from libraryhub.models.book_copy import BookCopyRow  # noqa: F401
from libraryhub.models.user_account import UserAccountRow  # noqa: F401
from libraryhub.models.loan import LoanRow  # noqa: F401
