"""
Domain service for books.

Besides plain CRUD this service owns the two non-trivial rules of the
catalog:

1. The publication-status transition rule: a published book can never be
   reverted to unpublished (Book.can_change_status_to).
2. The relationship invariant: every book has at least one author after a
   successful create or update. Creation links every requested author;
   updates go through PublicationReconciler, which inserts new links
   before removing stale ones.

All validation happens before the first write, so a rejected call leaves
no partial state behind. Each public method runs in a single unit of work.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from catalog.domain.entities import Book, Publication, PublicationStatus
from catalog.domain.exceptions import (
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from catalog.domain.ports import UnitOfWork, UnitOfWorkFactory
from catalog.domain.value_objects import BookWithAuthors
from .author_service import DEFAULT_ACTOR
from .publication_reconciliation import PublicationReconciler

logger = logging.getLogger(__name__)


class BookService:
    """
    Create, update, query and delete books and maintain their author links.

    Usage:
        service = BookService(uow_factory=lambda: SqliteUnitOfWork(db_path))
        service.create_book("こころ", Decimal("500"),
                            PublicationStatus.UNPUBLISHED, ["夏目漱石"])
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        """
        Args:
            uow_factory: Builds a fresh unit of work for each operation
        """
        self._uow_factory = uow_factory

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_book(
        self,
        title: str,
        price: Decimal,
        publication_status: PublicationStatus,
        author_names: Sequence[str],
        actor: str = DEFAULT_ACTOR,
    ) -> Book:
        """
        Create a book and link it to its authors.

        Steps, in order:
        1. Validate title, price and the author list
        2. Reject a duplicate title
        3. Check every author exists, in input order
        4. Insert the book, then one publication per author, all sharing
           the book's creation timestamp and attribution

        Raises:
            InvalidArgumentError: On blank title, negative price, empty
                author list or blank author name
            DuplicateResourceError: If the title already exists
            ResourceNotFoundError: If an author does not exist
        """
        self._validate(title, price, author_names)
        book = Book.create_new(title, price, publication_status, actor)
        names = _distinct(author_names)

        with self._uow_factory() as uow:
            if uow.books.exists_by_title(title):
                raise DuplicateResourceError(f"Book already exists: {title}")

            self._ensure_authors_exist(uow, names)

            book = uow.books.insert(book)
            for author_name in names:
                uow.publications.insert(
                    Publication.create_new(title, author_name, actor, book.created_at)
                )

        logger.info(f"Created book '{title}' with authors {names} (by {actor})")
        return book

    def update_book(
        self,
        title: str,
        price: Decimal,
        publication_status: PublicationStatus,
        author_names: Sequence[str],
        actor: str = DEFAULT_ACTOR,
    ) -> Book:
        """
        Update price, status and author list of an existing book.

        The title is the key and cannot change. Author links are reconciled
        with the smallest set of inserts and deletes; calling this with the
        currently linked authors writes no publication rows.

        Raises:
            InvalidArgumentError: On invalid fields, or when reverting a
                published book to unpublished
            ResourceNotFoundError: If the book or one of the authors does
                not exist
        """
        self._validate(title, price, author_names)

        with self._uow_factory() as uow:
            existing = uow.books.find_by_title(title)
            if existing is None:
                raise ResourceNotFoundError(f"Book not found: {title}")

            if not existing.can_change_status_to(publication_status):
                raise InvalidArgumentError(
                    "Cannot revert a published book to unpublished"
                )

            self._ensure_authors_exist(uow, author_names)

            book = uow.books.update(
                existing.with_changes(price, publication_status, actor)
            )
            changes = PublicationReconciler(uow.publications).reconcile(
                title, author_names, actor, book.updated_at
            )

        logger.info(
            f"Updated book '{title}' status={publication_status.value} "
            f"added={list(changes.to_add)} removed={list(changes.to_remove)} "
            f"(by {actor})"
        )
        return book

    def delete_by_title(self, title: str) -> None:
        """
        Delete a book; its publications go with it.

        Raises:
            ResourceNotFoundError: If the book does not exist
        """
        with self._uow_factory() as uow:
            if not uow.books.exists_by_title(title):
                raise ResourceNotFoundError(f"Book not found: {title}")
            uow.books.delete_by_title(title)

        logger.info(f"Deleted book '{title}'")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_title(self, title: str) -> Optional[Book]:
        with self._uow_factory() as uow:
            return uow.books.find_by_title(title)

    def find_all(self) -> List[Book]:
        with self._uow_factory() as uow:
            return uow.books.find_all()

    def find_by_publication_status(self, status: PublicationStatus) -> List[Book]:
        with self._uow_factory() as uow:
            return uow.books.find_by_publication_status(status)

    def find_by_author_name(self, author_name: str) -> List[Book]:
        with self._uow_factory() as uow:
            return uow.books.find_by_author_name(author_name)

    def get_authors_for_book(self, title: str) -> List[str]:
        """Return the names of the book's authors, sorted ascending."""
        with self._uow_factory() as uow:
            return _author_names(uow, title)

    def exists_by_title(self, title: str) -> bool:
        with self._uow_factory() as uow:
            return uow.books.exists_by_title(title)

    def get_book_with_authors(self, title: str) -> Optional[BookWithAuthors]:
        """Return the book with its authors, or None if it does not exist."""
        with self._uow_factory() as uow:
            book = uow.books.find_by_title(title)
            if book is None:
                return None
            return BookWithAuthors(book=book, authors=tuple(_author_names(uow, title)))

    def list_books(
        self,
        publication_status: Optional[PublicationStatus] = None,
        author_name: Optional[str] = None,
    ) -> List[BookWithAuthors]:
        """
        List books with their authors, ordered by title.

        Both filters are optional; when both are given a book must match
        both.
        """
        with self._uow_factory() as uow:
            if author_name is not None:
                books = uow.books.find_by_author_name(author_name)
                if publication_status is not None:
                    books = [
                        book for book in books
                        if book.publication_status is publication_status
                    ]
            elif publication_status is not None:
                books = uow.books.find_by_publication_status(publication_status)
            else:
                books = uow.books.find_all()

            return [
                BookWithAuthors(book=book, authors=tuple(_author_names(uow, book.title)))
                for book in books
            ]

    def get_books_by_author(self, author_name: str) -> List[BookWithAuthors]:
        """
        List the books of an existing author.

        Raises:
            ResourceNotFoundError: If the author does not exist
        """
        with self._uow_factory() as uow:
            if not uow.authors.exists_by_name(author_name):
                raise ResourceNotFoundError(f"Author not found: {author_name}")

            return [
                BookWithAuthors(book=book, authors=tuple(_author_names(uow, book.title)))
                for book in uow.books.find_by_author_name(author_name)
            ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(title: str, price: Decimal, author_names: Sequence[str]) -> None:
        if not title or not title.strip():
            raise InvalidArgumentError("Book title is required")

        if not isinstance(price, Decimal):
            raise InvalidArgumentError(
                f"Price must be a Decimal, got {type(price).__name__}"
            )

        if not price.is_finite() or price < 0:
            raise InvalidArgumentError(
                f"Price must be greater than or equal to 0, got {price}"
            )

        if not author_names:
            raise InvalidArgumentError("A book must have at least one author")

        for author_name in author_names:
            if not author_name or not author_name.strip():
                raise InvalidArgumentError("Author name is required")

    @staticmethod
    def _ensure_authors_exist(uow: UnitOfWork, author_names: Sequence[str]) -> None:
        for author_name in author_names:
            if not uow.authors.exists_by_name(author_name):
                raise ResourceNotFoundError(f"Author not found: {author_name}")


def _distinct(names: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(names))


def _author_names(uow: UnitOfWork, title: str) -> List[str]:
    return sorted(
        publication.author_name
        for publication in uow.publications.find_by_book_title(title)
    )
