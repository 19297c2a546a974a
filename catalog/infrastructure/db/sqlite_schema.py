"""
SQLite schema for the catalog.

Tables are keyed by natural keys. Publications reference both parents with
ON DELETE CASCADE, so deleting a book or an author removes its links;
foreign keys are only enforced on connections that enable
``PRAGMA foreign_keys``.

The CHECK constraints and the un-publish trigger duplicate rules the domain
services already enforce. They are a backstop for writes that bypass the
services, not the primary enforcement.
"""

import sqlite3
from pathlib import Path

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS authors (
        name TEXT PRIMARY KEY,
        birth_date TEXT NOT NULL,
        created_at TEXT NOT NULL,
        created_by TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        updated_by TEXT NOT NULL,
        CHECK (length(trim(name)) > 0)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS books (
        title TEXT PRIMARY KEY,
        price TEXT NOT NULL,
        publication_status TEXT NOT NULL DEFAULT 'UNPUBLISHED',
        created_at TEXT NOT NULL,
        created_by TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        updated_by TEXT NOT NULL,
        CHECK (length(trim(title)) > 0),
        CHECK (CAST(price AS REAL) >= 0),
        CHECK (publication_status IN ('UNPUBLISHED', 'PUBLISHED'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS publications (
        book_title TEXT NOT NULL,
        author_name TEXT NOT NULL,
        created_at TEXT NOT NULL,
        created_by TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        updated_by TEXT NOT NULL,
        PRIMARY KEY (book_title, author_name),
        FOREIGN KEY (book_title) REFERENCES books(title)
            ON DELETE CASCADE ON UPDATE CASCADE,
        FOREIGN KEY (author_name) REFERENCES authors(name)
            ON DELETE CASCADE ON UPDATE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_publications_author ON publications(author_name)",
    "CREATE INDEX IF NOT EXISTS idx_books_status ON books(publication_status)",
    """
    CREATE TRIGGER IF NOT EXISTS prevent_book_unpublish
    BEFORE UPDATE OF publication_status ON books
    FOR EACH ROW
    WHEN OLD.publication_status = 'PUBLISHED'
        AND NEW.publication_status = 'UNPUBLISHED'
    BEGIN
        SELECT RAISE(ABORT, 'Cannot revert a published book to unpublished');
    END
    """,
)


def create_schema(db_path: Path) -> None:
    """
    Create the database file (and its directory) and all tables.

    Safe to call on an existing database.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        with conn:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
    finally:
        conn.close()
