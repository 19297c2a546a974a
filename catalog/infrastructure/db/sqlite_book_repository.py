"""
SQLite implementation of the BookRepository port.

Prices are stored as the Decimal's string form so no precision is lost in
a round trip.
"""

import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from catalog.domain.entities import Book, PublicationStatus
from catalog.domain.ports import BookRepository


class SqliteBookRepository(BookRepository):
    """Book adapter bound to a SqliteUnitOfWork connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _book_to_row(self, book: Book) -> dict:
        """Convert a Book entity to a database row dict."""
        return {
            "title": book.title,
            "price": str(book.price),
            "publication_status": book.publication_status.value,
            "created_at": book.created_at.isoformat(),
            "created_by": book.created_by,
            "updated_at": book.updated_at.isoformat(),
            "updated_by": book.updated_by,
        }

    def _row_to_book(self, row: sqlite3.Row) -> Book:
        """Convert a database row to a Book entity."""
        return Book(
            title=row["title"],
            price=Decimal(row["price"]),
            publication_status=PublicationStatus(row["publication_status"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            created_by=row["created_by"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
            updated_by=row["updated_by"],
        )

    def insert(self, book: Book) -> Book:
        try:
            self._conn.execute("""
                INSERT INTO books
                (title, price, publication_status,
                 created_at, created_by, updated_at, updated_by)
                VALUES
                (:title, :price, :publication_status,
                 :created_at, :created_by, :updated_at, :updated_by)
            """, self._book_to_row(book))
        except sqlite3.IntegrityError as e:
            raise RuntimeError(f"Book violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while inserting book: {e}") from e
        return book

    def update(self, book: Book) -> Book:
        try:
            cursor = self._conn.execute("""
                UPDATE books
                SET price = :price,
                    publication_status = :publication_status,
                    updated_at = :updated_at,
                    updated_by = :updated_by
                WHERE title = :title
            """, self._book_to_row(book))
        except sqlite3.IntegrityError as e:
            raise RuntimeError(f"Book violates catalog constraints: {e}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Database error while updating book: {e}") from e

        if cursor.rowcount == 0:
            raise RuntimeError(f"Book row vanished during update: {book.title}")
        return book

    def find_by_title(self, title: str) -> Optional[Book]:
        row = self._conn.execute(
            "SELECT * FROM books WHERE title = ?",
            (title,)
        ).fetchone()

        if row is None:
            return None

        return self._row_to_book(row)

    def find_all(self) -> List[Book]:
        rows = self._conn.execute("SELECT * FROM books ORDER BY title").fetchall()
        return [self._row_to_book(row) for row in rows]

    def find_by_publication_status(self, status: PublicationStatus) -> List[Book]:
        rows = self._conn.execute(
            "SELECT * FROM books WHERE publication_status = ? ORDER BY title",
            (status.value,)
        ).fetchall()
        return [self._row_to_book(row) for row in rows]

    def find_by_author_name(self, author_name: str) -> List[Book]:
        rows = self._conn.execute("""
            SELECT b.* FROM books b
            JOIN publications p ON p.book_title = b.title
            WHERE p.author_name = ?
            ORDER BY b.title
        """, (author_name,)).fetchall()
        return [self._row_to_book(row) for row in rows]

    def delete_by_title(self, title: str) -> bool:
        cursor = self._conn.execute(
            "DELETE FROM books WHERE title = ?",
            (title,)
        )
        return cursor.rowcount > 0

    def exists_by_title(self, title: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM books WHERE title = ?",
            (title,)
        ).fetchone()
        return row is not None
