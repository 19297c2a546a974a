"""
Domain service for authors.
"""

import logging
from datetime import date
from typing import List, Optional

from catalog.domain.entities import Author
from catalog.domain.exceptions import DuplicateResourceError, ResourceNotFoundError
from catalog.domain.ports import UnitOfWorkFactory

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "system"


class AuthorService:
    """
    Create, update, query and delete authors.

    Every public method runs inside its own unit of work, so its writes
    either all commit or none do.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        """
        Args:
            uow_factory: Builds a fresh unit of work for each operation
        """
        self._uow_factory = uow_factory

    def create_author(
        self,
        name: str,
        birth_date: date,
        actor: str = DEFAULT_ACTOR,
    ) -> Author:
        """
        Create a new author.

        Raises:
            InvalidArgumentError: If the name is blank or the birth date is
                not strictly in the past
            DuplicateResourceError: If an author with this name exists
        """
        Author.validate(name, birth_date)

        with self._uow_factory() as uow:
            if uow.authors.exists_by_name(name):
                raise DuplicateResourceError(f"Author already exists: {name}")

            author = uow.authors.insert(Author.create_new(name, birth_date, actor))

        logger.info(f"Created author '{name}' (by {actor})")
        return author

    def update_author(
        self,
        name: str,
        birth_date: date,
        actor: str = DEFAULT_ACTOR,
    ) -> Author:
        """
        Change an author's birth date.

        Raises:
            InvalidArgumentError: If the name is blank or the birth date is
                not strictly in the past
            ResourceNotFoundError: If no author has this name
        """
        Author.validate(name, birth_date)

        with self._uow_factory() as uow:
            existing = uow.authors.find_by_name(name)
            if existing is None:
                raise ResourceNotFoundError(f"Author not found: {name}")

            author = uow.authors.update(existing.with_birth_date(birth_date, actor))

        logger.info(f"Updated author '{name}' (by {actor})")
        return author

    def find_by_name(self, name: str) -> Optional[Author]:
        with self._uow_factory() as uow:
            return uow.authors.find_by_name(name)

    def find_all(self) -> List[Author]:
        """Return every author ordered by name."""
        with self._uow_factory() as uow:
            return uow.authors.find_all()

    def delete_by_name(self, name: str) -> None:
        """
        Delete an author and, through the storage cascade, its links.

        Books whose only author this was are left without authors; they are
        reported in the log but the deletion is not blocked.

        Raises:
            ResourceNotFoundError: If no author has this name
        """
        with self._uow_factory() as uow:
            if not uow.authors.exists_by_name(name):
                raise ResourceNotFoundError(f"Author not found: {name}")

            orphaned = [
                publication.book_title
                for publication in uow.publications.find_by_author_name(name)
                if uow.publications.count_by_book_title(publication.book_title) == 1
            ]
            uow.authors.delete_by_name(name)

        logger.info(f"Deleted author '{name}'")
        if orphaned:
            logger.warning(
                f"Books left without authors after deleting '{name}': {orphaned}"
            )

    def exists_by_name(self, name: str) -> bool:
        with self._uow_factory() as uow:
            return uow.authors.exists_by_name(name)
