"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Contract shared by every repository below:
- Non-null columns always map to non-optional entity fields; a repository
  never hands back a half-populated entity.
- Deleting a book or an author also deletes its publications (cascade).
- Storage failures surface as RuntimeError.
"""

from types import TracebackType
from typing import Callable, List, Optional, Protocol, Type

from .entities import Author, Book, Publication, PublicationStatus


class AuthorRepository(Protocol):
    """Port for persisting and retrieving authors, keyed by name."""

    def insert(self, author: Author) -> Author:
        """
        Insert a new author.

        Raises:
            RuntimeError: If the name already exists or a database error occurs
        """
        ...

    def update(self, author: Author) -> Author:
        """
        Overwrite birth date and update attribution of an existing author.

        Creation attribution is never changed by an update.
        """
        ...

    def find_by_name(self, name: str) -> Optional[Author]:
        """Return the author, or None if no author has this name."""
        ...

    def find_all(self) -> List[Author]:
        """Return every author ordered by name ascending."""
        ...

    def delete_by_name(self, name: str) -> bool:
        """Delete an author. Returns True if a row was deleted."""
        ...

    def exists_by_name(self, name: str) -> bool:
        ...


class BookRepository(Protocol):
    """Port for persisting and retrieving books, keyed by title."""

    def insert(self, book: Book) -> Book:
        """
        Insert a new book.

        Raises:
            RuntimeError: If the title already exists or a database error occurs
        """
        ...

    def update(self, book: Book) -> Book:
        """Overwrite price, status and update attribution of an existing book."""
        ...

    def find_by_title(self, title: str) -> Optional[Book]:
        ...

    def find_all(self) -> List[Book]:
        """Return every book ordered by title ascending."""
        ...

    def find_by_publication_status(self, status: PublicationStatus) -> List[Book]:
        """Return books in the given state, ordered by title ascending."""
        ...

    def find_by_author_name(self, author_name: str) -> List[Book]:
        """Return books linked to the author, ordered by title ascending."""
        ...

    def delete_by_title(self, title: str) -> bool:
        """Delete a book and its publications. Returns True if deleted."""
        ...

    def exists_by_title(self, title: str) -> bool:
        ...


class PublicationRepository(Protocol):
    """Port for the book/author join records."""

    def insert(self, publication: Publication) -> Publication:
        """
        Insert a link.

        The referenced book and author must already exist; the services
        check this before calling.
        """
        ...

    def find_by_book_title(self, book_title: str) -> List[Publication]:
        """Return the book's links ordered by author name ascending."""
        ...

    def find_by_author_name(self, author_name: str) -> List[Publication]:
        """Return the author's links ordered by book title ascending."""
        ...

    def count_by_book_title(self, book_title: str) -> int:
        ...

    def delete_by_book_title_and_author_name(
        self, book_title: str, author_name: str
    ) -> bool:
        """Delete one link. Returns True if it existed."""
        ...


class UnitOfWork(Protocol):
    """
    One all-or-nothing transaction spanning the three repositories.

    Used as a context manager. Leaving the block normally commits; leaving
    it with an exception rolls back and lets the exception propagate. If
    the commit itself fails, the transaction is rolled back and the error
    is raised.
    """

    authors: AuthorRepository
    books: BookRepository
    publications: PublicationRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
"""Builds a fresh, not yet entered, unit of work per service call."""
