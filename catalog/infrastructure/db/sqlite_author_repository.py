"""
SQLite implementation of the AuthorRepository port.
"""

import sqlite3
from datetime import date, datetime
from typing import List, Optional

from catalog.domain.entities import Author
from catalog.domain.ports import AuthorRepository


class SqliteAuthorRepository(AuthorRepository):
    """
    Works on a connection owned by SqliteUnitOfWork; it never commits,
    rolls back or closes the connection itself.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _author_to_row(self, author: Author) -> dict:
        """Convert an Author entity to a database row dict."""
        return {
            "name": author.name,
            "birth_date": author.birth_date.isoformat(),
            "created_at": author.created_at.isoformat(),
            "created_by": author.created_by,
            "updated_at": author.updated_at.isoformat(),
            "updated_by": author.updated_by,
        }

    def _row_to_author(self, row: sqlite3.Row) -> Author:
        """Convert a database row to an Author entity."""
        return Author(
            name=row["name"],
            birth_date=date.fromisoformat(row["birth_date"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            created_by=row["created_by"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
            updated_by=row["updated_by"],
        )

    def insert(self, author: Author) -> Author:
        """Insert a new author."""
        try:
            self._conn.execute("""
                INSERT INTO authors
                (name, birth_date, created_at, created_by, updated_at, updated_by)
                VALUES
                (:name, :birth_date, :created_at, :created_by, :updated_at, :updated_by)
            """, self._author_to_row(author))
        except sqlite3.IntegrityError as e:
            raise RuntimeError(f"Author violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while inserting author: {e}") from e
        return author

    def update(self, author: Author) -> Author:
        """Update birth date and update attribution; creation fields are kept."""
        try:
            cursor = self._conn.execute("""
                UPDATE authors
                SET birth_date = :birth_date,
                    updated_at = :updated_at,
                    updated_by = :updated_by
                WHERE name = :name
            """, self._author_to_row(author))
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while updating author: {e}") from e

        if cursor.rowcount == 0:
            raise RuntimeError(f"Author row vanished during update: {author.name}")
        return author

    def find_by_name(self, name: str) -> Optional[Author]:
        row = self._conn.execute(
            "SELECT * FROM authors WHERE name = ?",
            (name,)
        ).fetchone()

        if row is None:
            return None

        return self._row_to_author(row)

    def find_all(self) -> List[Author]:
        rows = self._conn.execute(
            "SELECT * FROM authors ORDER BY name"
        ).fetchall()
        return [self._row_to_author(row) for row in rows]

    def delete_by_name(self, name: str) -> bool:
        cursor = self._conn.execute(
            "DELETE FROM authors WHERE name = ?",
            (name,)
        )
        return cursor.rowcount > 0

    def exists_by_name(self, name: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM authors WHERE name = ?",
            (name,)
        ).fetchone()
        return row is not None
