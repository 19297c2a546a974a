"""
Domain entities for the book/author catalog.

Entities are identified by their natural key (book title, author name, or
the (title, name) pair for a publication). They are immutable: every change
produces a new value with refreshed update attribution, and every value is
validated on construction.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Optional

from .exceptions import InvalidArgumentError


class PublicationStatus(str, Enum):
    """Publication state of a book."""

    UNPUBLISHED = "UNPUBLISHED"
    PUBLISHED = "PUBLISHED"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _require_actor(created_by: str, updated_by: str) -> None:
    if not created_by or not created_by.strip():
        raise InvalidArgumentError("created_by is required")
    if not updated_by or not updated_by.strip():
        raise InvalidArgumentError("updated_by is required")


@dataclass(frozen=True)
class Author:
    """
    An author in the catalog.

    The name is the natural key. The birth date must lie strictly before
    today; "today" is evaluated every time an Author is built.
    """

    name: str
    """Author name (natural key)"""

    birth_date: date
    """Date of birth, strictly in the past"""

    created_at: datetime
    """When this author was added"""

    created_by: str
    """Who added this author"""

    updated_at: datetime
    """When this author was last changed"""

    updated_by: str
    """Who last changed this author"""

    def __post_init__(self) -> None:
        """Validate author data."""
        Author.validate(self.name, self.birth_date)
        _require_actor(self.created_by, self.updated_by)

    @staticmethod
    def validate(name: str, birth_date: date) -> None:
        """
        Check the user-supplied author fields.

        The name is checked first so its message wins when both are invalid.

        Raises:
            InvalidArgumentError: If the name is blank or the birth date is
                today or later
        """
        if not name or not name.strip():
            raise InvalidArgumentError("Author name is required")

        if birth_date >= date.today():
            raise InvalidArgumentError("Birth date must be before today")

    @staticmethod
    def create_new(
        name: str,
        birth_date: date,
        actor: str,
        now: Optional[datetime] = None,
    ) -> "Author":
        """
        Factory method for a brand-new author.

        Both timestamps share the same instant and both attribution fields
        are set to ``actor``.
        """
        now = now or _utc_now()
        return Author(
            name=name,
            birth_date=birth_date,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
        )

    def with_birth_date(
        self,
        birth_date: date,
        actor: str,
        now: Optional[datetime] = None,
    ) -> "Author":
        """Return a copy with a new birth date, keeping creation attribution."""
        return replace(
            self,
            birth_date=birth_date,
            updated_at=now or _utc_now(),
            updated_by=actor,
        )


@dataclass(frozen=True)
class Book:
    """
    A book in the catalog.

    The title is the natural key and never changes. The author linkage is
    not stored on the book; it lives in Publication records.
    """

    title: str
    """Book title (natural key)"""

    price: Decimal
    """Price, zero or greater"""

    publication_status: PublicationStatus
    """Current publication state"""

    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str

    def __post_init__(self) -> None:
        """Validate book data."""
        if not self.title or not self.title.strip():
            raise InvalidArgumentError("Book title is required")

        if not isinstance(self.price, Decimal):
            raise InvalidArgumentError(
                f"Price must be a Decimal, got {type(self.price).__name__}"
            )

        if not self.price.is_finite() or self.price < 0:
            raise InvalidArgumentError(
                f"Price must be greater than or equal to 0, got {self.price}"
            )

        if not isinstance(self.publication_status, PublicationStatus):
            raise InvalidArgumentError(
                f"Unknown publication status: {self.publication_status!r}"
            )

        _require_actor(self.created_by, self.updated_by)

    def can_change_status_to(self, new_status: PublicationStatus) -> bool:
        """
        Check whether the book may move to ``new_status``.

        A published book can never go back to unpublished; every other
        transition, including staying in the same state, is allowed.
        """
        return not (
            self.publication_status is PublicationStatus.PUBLISHED
            and new_status is PublicationStatus.UNPUBLISHED
        )

    def is_published(self) -> bool:
        return self.publication_status is PublicationStatus.PUBLISHED

    @staticmethod
    def create_new(
        title: str,
        price: Decimal,
        publication_status: PublicationStatus,
        actor: str,
        now: Optional[datetime] = None,
    ) -> "Book":
        """Factory method for a brand-new book."""
        now = now or _utc_now()
        return Book(
            title=title,
            price=price,
            publication_status=publication_status,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
        )

    def with_changes(
        self,
        price: Decimal,
        publication_status: PublicationStatus,
        actor: str,
        now: Optional[datetime] = None,
    ) -> "Book":
        """
        Return a copy with new price and status.

        The transition rule is not checked here; callers decide with
        can_change_status_to() before building the new value.
        """
        return replace(
            self,
            price=price,
            publication_status=publication_status,
            updated_at=now or _utc_now(),
            updated_by=actor,
        )


@dataclass(frozen=True)
class Publication:
    """Join record linking one book to one of its authors."""

    book_title: str
    author_name: str
    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str

    def __post_init__(self) -> None:
        """Validate the composite key."""
        if not self.book_title or not self.book_title.strip():
            raise InvalidArgumentError("Book title is required")
        if not self.author_name or not self.author_name.strip():
            raise InvalidArgumentError("Author name is required")
        _require_actor(self.created_by, self.updated_by)

    @property
    def key(self) -> tuple[str, str]:
        return (self.book_title, self.author_name)

    @staticmethod
    def create_new(
        book_title: str,
        author_name: str,
        actor: str,
        now: Optional[datetime] = None,
    ) -> "Publication":
        now = now or _utc_now()
        return Publication(
            book_title=book_title,
            author_name=author_name,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
        )
