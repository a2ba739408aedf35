"""Catalog Entities — Book and Site, immutable after creation.

Invariants:
    - Book isbn/title/author are stored trimmed and never blank
    - Site name is stored trimmed and never blank; address is optional
    - Both are frozen: no setter, no mutation method
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from libraryhub.core.guards import require_text


@dataclass(frozen=True)
class Book:
    """A title in the catalog. Physical instances are BookCopy entities."""
    isbn: str
    title: str
    author: str
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "isbn", require_text(self.isbn, "isbn", "ISBN cannot be empty."),
        )
        object.__setattr__(
            self, "title", require_text(self.title, "title", "Title cannot be empty."),
        )
        object.__setattr__(
            self, "author",
            require_text(self.author, "author", "Author cannot be empty."),
        )


@dataclass(frozen=True)
class Site:
    """A library branch holding copies."""
    name: str
    address: str | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "name",
            require_text(self.name, "name", "Site name cannot be empty."),
        )
