"""
SQLite implementation of the UnitOfWork port.

One unit of work is one connection and one transaction. The three
repositories share that connection, so a book update and its publication
changes commit or roll back together.
"""

import logging
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from catalog.domain.ports import UnitOfWorkFactory
from catalog.infrastructure.db.sqlite_author_repository import SqliteAuthorRepository
from catalog.infrastructure.db.sqlite_book_repository import SqliteBookRepository
from catalog.infrastructure.db.sqlite_publication_repository import SqlitePublicationRepository
from catalog.infrastructure.db.sqlite_schema import create_schema

logger = logging.getLogger(__name__)


class SqliteUnitOfWork:
    """
    Usage:
        with SqliteUnitOfWork(db_path) as uow:
            uow.books.insert(book)
            uow.publications.insert(publication)
        # committed here, or rolled back if the block raised
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with row factory and foreign keys on."""
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def __enter__(self) -> "SqliteUnitOfWork":
        if self._conn is not None:
            raise RuntimeError("Unit of work is already in progress")

        self._conn = self._get_connection()
        self.authors = SqliteAuthorRepository(self._conn)
        self.books = SqliteBookRepository(self._conn)
        self.publications = SqlitePublicationRepository(self._conn)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        conn = self._conn
        self._conn = None
        try:
            if exc_type is not None:
                conn.rollback()
                return False

            try:
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise RuntimeError(f"Database error while committing: {e}") from e
            return False
        finally:
            conn.close()


def sqlite_uow_factory(db_path: Path) -> UnitOfWorkFactory:
    """
    Prepare the database at ``db_path`` and return a unit-of-work factory
    for it.
    """
    create_schema(db_path)
    logger.info(f"Using SQLite catalog at {db_path}")

    def factory() -> SqliteUnitOfWork:
        return SqliteUnitOfWork(db_path)

    return factory
