"""
SQLite implementation of the PublicationRepository port.
"""

import sqlite3
from datetime import datetime
from typing import List

from catalog.domain.entities import Publication
from catalog.domain.ports import PublicationRepository


class SqlitePublicationRepository(PublicationRepository):
    """
    Links between books and authors. The foreign keys reject links to
    missing parents (reported as RuntimeError).
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _publication_to_row(self, publication: Publication) -> dict:
        return {
            "book_title": publication.book_title,
            "author_name": publication.author_name,
            "created_at": publication.created_at.isoformat(),
            "created_by": publication.created_by,
            "updated_at": publication.updated_at.isoformat(),
            "updated_by": publication.updated_by,
        }

    def _row_to_publication(self, row: sqlite3.Row) -> Publication:
        return Publication(
            book_title=row["book_title"],
            author_name=row["author_name"],
            created_at=datetime.fromisoformat(row["created_at"]),
            created_by=row["created_by"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
            updated_by=row["updated_by"],
        )

    def insert(self, publication: Publication) -> Publication:
        try:
            self._conn.execute("""
                INSERT INTO publications
                (book_title, author_name, created_at, created_by, updated_at, updated_by)
                VALUES
                (:book_title, :author_name, :created_at, :created_by, :updated_at, :updated_by)
            """, self._publication_to_row(publication))
        except sqlite3.IntegrityError as e:
            raise RuntimeError(f"Publication violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while inserting publication: {e}") from e
        return publication

    def find_by_book_title(self, book_title: str) -> List[Publication]:
        rows = self._conn.execute(
            "SELECT * FROM publications WHERE book_title = ? ORDER BY author_name",
            (book_title,)
        ).fetchall()
        return [self._row_to_publication(row) for row in rows]

    def find_by_author_name(self, author_name: str) -> List[Publication]:
        rows = self._conn.execute(
            "SELECT * FROM publications WHERE author_name = ? ORDER BY book_title",
            (author_name,)
        ).fetchall()
        return [self._row_to_publication(row) for row in rows]

    def count_by_book_title(self, book_title: str) -> int:
        result = self._conn.execute(
            "SELECT COUNT(*) AS cnt FROM publications WHERE book_title = ?",
            (book_title,)
        ).fetchone()
        return result["cnt"]

    def delete_by_book_title_and_author_name(
        self, book_title: str, author_name: str
    ) -> bool:
        cursor = self._conn.execute(
            "DELETE FROM publications WHERE book_title = ? AND author_name = ?",
            (book_title, author_name)
        )
        return cursor.rowcount > 0
