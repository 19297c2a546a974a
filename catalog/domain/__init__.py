"""
Domain layer - Core business logic and entities.

This layer contains the business entities, value objects, and defines
the ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Author, Book, Publication, PublicationStatus
from .exceptions import (
    CatalogError,
    DuplicateResourceError,
    ErrorKind,
    InvalidArgumentError,
    PublicationIntegrityError,
    ResourceNotFoundError,
)
from .value_objects import BookWithAuthors, PublicationChanges

__all__ = [
    # Entities
    "Author",
    "Book",
    "Publication",
    "PublicationStatus",
    # Value Objects
    "BookWithAuthors",
    "PublicationChanges",
    # Errors
    "CatalogError",
    "ErrorKind",
    "InvalidArgumentError",
    "ResourceNotFoundError",
    "DuplicateResourceError",
    "PublicationIntegrityError",
]
