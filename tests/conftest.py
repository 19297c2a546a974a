"""
Shared fixtures and fake adapters.

Domain tests run the services against in-memory fakes of the storage
ports. The fakes honour the port contract (ordering, cascade on delete,
rollback when the unit of work fails) and record the writes they receive
so tests can assert on them.
"""

import copy
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from catalog.domain.entities import Author, Book, Publication, PublicationStatus
from catalog.domain.services import AuthorService, BookService
from catalog.infrastructure.db.sqlite_unit_of_work import sqlite_uow_factory


# =============================================================================
# Fake implementations for testing
# =============================================================================


class FakeStore:
    """Tables shared by the fake repositories of one FakeUnitOfWork."""

    def __init__(self):
        self.authors: Dict[str, Author] = {}
        self.books: Dict[str, Book] = {}
        self.publications: Dict[Tuple[str, str], Publication] = {}


class FakeAuthorRepository:
    def __init__(self, store: FakeStore):
        self._store = store
        self.insert_calls: List[str] = []
        self.update_calls: List[str] = []

    def insert(self, author: Author) -> Author:
        if author.name in self._store.authors:
            raise RuntimeError(f"duplicate author {author.name}")
        self.insert_calls.append(author.name)
        self._store.authors[author.name] = author
        return author

    def update(self, author: Author) -> Author:
        self.update_calls.append(author.name)
        existing = self._store.authors[author.name]
        self._store.authors[author.name] = Author(
            name=author.name,
            birth_date=author.birth_date,
            created_at=existing.created_at,
            created_by=existing.created_by,
            updated_at=author.updated_at,
            updated_by=author.updated_by,
        )
        return author

    def find_by_name(self, name: str) -> Optional[Author]:
        return self._store.authors.get(name)

    def find_all(self) -> List[Author]:
        return [self._store.authors[name] for name in sorted(self._store.authors)]

    def delete_by_name(self, name: str) -> bool:
        if name not in self._store.authors:
            return False
        del self._store.authors[name]
        for key in [k for k in self._store.publications if k[1] == name]:
            del self._store.publications[key]
        return True

    def exists_by_name(self, name: str) -> bool:
        return name in self._store.authors


class FakeBookRepository:
    def __init__(self, store: FakeStore):
        self._store = store
        self.insert_calls: List[str] = []
        self.update_calls: List[str] = []

    def insert(self, book: Book) -> Book:
        if book.title in self._store.books:
            raise RuntimeError(f"duplicate book {book.title}")
        self.insert_calls.append(book.title)
        self._store.books[book.title] = book
        return book

    def update(self, book: Book) -> Book:
        self.update_calls.append(book.title)
        self._store.books[book.title] = book
        return book

    def find_by_title(self, title: str) -> Optional[Book]:
        return self._store.books.get(title)

    def find_all(self) -> List[Book]:
        return [self._store.books[title] for title in sorted(self._store.books)]

    def find_by_publication_status(self, status: PublicationStatus) -> List[Book]:
        return [book for book in self.find_all() if book.publication_status is status]

    def find_by_author_name(self, author_name: str) -> List[Book]:
        titles = {title for title, name in self._store.publications if name == author_name}
        return [self._store.books[title] for title in sorted(titles)]

    def delete_by_title(self, title: str) -> bool:
        if title not in self._store.books:
            return False
        del self._store.books[title]
        for key in [k for k in self._store.publications if k[0] == title]:
            del self._store.publications[key]
        return True

    def exists_by_title(self, title: str) -> bool:
        return title in self._store.books


class FakePublicationRepository:
    """Records every write as ("insert" | "delete", title, name)."""

    def __init__(self, store: FakeStore):
        self._store = store
        self.writes: List[Tuple[str, str, str]] = []

    def insert(self, publication: Publication) -> Publication:
        if publication.key in self._store.publications:
            raise RuntimeError(f"duplicate publication {publication.key}")
        if publication.book_title not in self._store.books:
            raise RuntimeError(f"unknown book {publication.book_title}")
        if publication.author_name not in self._store.authors:
            raise RuntimeError(f"unknown author {publication.author_name}")
        self.writes.append(("insert", publication.book_title, publication.author_name))
        self._store.publications[publication.key] = publication
        return publication

    def find_by_book_title(self, book_title: str) -> List[Publication]:
        return sorted(
            (p for p in self._store.publications.values() if p.book_title == book_title),
            key=lambda p: p.author_name,
        )

    def find_by_author_name(self, author_name: str) -> List[Publication]:
        return sorted(
            (p for p in self._store.publications.values() if p.author_name == author_name),
            key=lambda p: p.book_title,
        )

    def count_by_book_title(self, book_title: str) -> int:
        return len(self.find_by_book_title(book_title))

    def delete_by_book_title_and_author_name(self, book_title: str, author_name: str) -> bool:
        self.writes.append(("delete", book_title, author_name))
        return self._store.publications.pop((book_title, author_name), None) is not None


class FakeUnitOfWork:
    """
    In-memory unit of work. Snapshots the tables on enter and restores them
    if the block raises, so rollback semantics match the real adapter.
    """

    def __init__(self):
        self.store = FakeStore()
        self.authors = FakeAuthorRepository(self.store)
        self.books = FakeBookRepository(self.store)
        self.publications = FakePublicationRepository(self.store)
        self.commits = 0
        self.rollbacks = 0
        self._snapshot = None

    def __enter__(self) -> "FakeUnitOfWork":
        self._snapshot = (
            copy.copy(self.store.authors),
            copy.copy(self.store.books),
            copy.copy(self.store.publications),
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            (self.store.authors, self.store.books, self.store.publications) = self._snapshot
            self.rollbacks += 1
        else:
            self.commits += 1
        self._snapshot = None
        return False


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def yesterday() -> date:
    return date.today() - timedelta(days=1)


@pytest.fixture
def uow():
    """A single fake unit of work reused by every service call of a test."""
    return FakeUnitOfWork()


@pytest.fixture
def author_service(uow):
    return AuthorService(uow_factory=lambda: uow)


@pytest.fixture
def book_service(uow):
    return BookService(uow_factory=lambda: uow)


@pytest.fixture
def sqlite_factory(tmp_path):
    """
    Unit-of-work factory on a temporary database for each test.

    Uses pytest's tmp_path fixture to ensure isolation between tests.
    """
    return sqlite_uow_factory(tmp_path / "test_catalog.db")


@pytest.fixture
def client(sqlite_factory):
    """TestClient wired to services backed by a temporary SQLite database."""
    from catalog.main import app
    from catalog.api.v1.dependencies import get_author_service, get_book_service

    app.dependency_overrides[get_author_service] = lambda: AuthorService(sqlite_factory)
    app.dependency_overrides[get_book_service] = lambda: BookService(sqlite_factory)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
