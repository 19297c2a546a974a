"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from dataclasses import dataclass
from typing import Tuple

from .entities import Book


@dataclass(frozen=True)
class PublicationChanges:
    """
    Minimal set of link changes that turns a book's current authors into
    the desired ones.
    """

    to_add: Tuple[str, ...] = ()
    """Author names to link, in the order they were requested"""

    to_remove: Tuple[str, ...] = ()
    """Author names to unlink, sorted ascending"""

    def __post_init__(self) -> None:
        """Validate the plan."""
        overlap = set(self.to_add) & set(self.to_remove)
        if overlap:
            raise ValueError(
                f"An author cannot be both added and removed: {sorted(overlap)}"
            )

    def is_empty(self) -> bool:
        """True when the current linkage already matches the desired one."""
        return not self.to_add and not self.to_remove


@dataclass(frozen=True)
class BookWithAuthors:
    """A book together with the names of its linked authors."""

    book: Book
    """The book entity"""

    authors: Tuple[str, ...]
    """Linked author names, sorted ascending"""

    def __post_init__(self) -> None:
        if list(self.authors) != sorted(self.authors):
            raise ValueError("authors must be sorted ascending")
