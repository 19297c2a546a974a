"""
Domain services package.

Services orchestrate domain logic that doesn't naturally belong to a single
entity. They coordinate between entities and ports to implement use cases.

Following Hexagonal Architecture principles, services depend only on domain
entities, value objects, and port protocols (never on concrete implementations).
"""

from .author_service import AuthorService
from .book_service import BookService
from .publication_reconciliation import PublicationReconciler, plan_publication_changes

__all__ = [
    "AuthorService",
    "BookService",
    "PublicationReconciler",
    "plan_publication_changes",
]
