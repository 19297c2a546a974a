"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the unit-of-work factory and
the domain services for use with FastAPI's Depends() system.

Note: We use module-level singletons instead of @lru_cache with Depends()
parameters, which is an antipattern that can cause unexpected behavior.
The services themselves are stateless; every request still gets its own
unit of work (and SQLite connection).
"""

import os
from pathlib import Path
from typing import Optional

from fastapi import Header

from catalog.domain.ports import UnitOfWorkFactory
from catalog.domain.services import AuthorService, BookService
from catalog.infrastructure.db.sqlite_unit_of_work import sqlite_uow_factory

# Configuration from environment
DB_PATH = Path(os.getenv("DB_PATH", "data/catalog.db"))
DEFAULT_ACTOR = os.getenv("DEFAULT_ACTOR", "system")

# Module-level singletons (initialized lazily)
_uow_factory: Optional[UnitOfWorkFactory] = None
_author_service: Optional[AuthorService] = None
_book_service: Optional[BookService] = None


def get_uow_factory() -> UnitOfWorkFactory:
    """Provide the unit-of-work factory, creating the schema on first use."""
    global _uow_factory
    if _uow_factory is None:
        _uow_factory = sqlite_uow_factory(DB_PATH)
    return _uow_factory


def get_author_service() -> AuthorService:
    """Provide a singleton instance of the author service."""
    global _author_service
    if _author_service is None:
        _author_service = AuthorService(get_uow_factory())
    return _author_service


def get_book_service() -> BookService:
    """Provide a singleton instance of the book service."""
    global _book_service
    if _book_service is None:
        _book_service = BookService(get_uow_factory())
    return _book_service


def get_actor(x_actor: Optional[str] = Header(default=None)) -> str:
    """
    Resolve who performs the request.

    Taken from the X-Actor header; falls back to DEFAULT_ACTOR when the
    header is missing or empty.
    """
    return x_actor or DEFAULT_ACTOR


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to inject mock dependencies by resetting
    the module state between test cases.
    """
    global _uow_factory, _author_service, _book_service

    _uow_factory = None
    _author_service = None
    _book_service = None
