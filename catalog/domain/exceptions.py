"""
Domain errors for the catalog.

The hierarchy is closed: every error a domain operation raises on purpose
is one of the three CatalogError subclasses below, each tagged with an
ErrorKind. Callers (the HTTP layer) translate errors by kind, not by class.

Anything else escaping a service (storage failures, broken integrity
guards) is an unclassified infrastructure failure.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Caller-visible category of a domain error."""

    INVALID_ARGUMENT = "invalid_argument"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DUPLICATE_RESOURCE = "duplicate_resource"


class CatalogError(Exception):
    """Base class for all classified domain errors."""

    kind: ClassVar[ErrorKind]


class InvalidArgumentError(CatalogError, ValueError):
    """Input is malformed or violates a domain rule. Raised before any write."""

    kind = ErrorKind.INVALID_ARGUMENT


class ResourceNotFoundError(CatalogError, LookupError):
    """A book or author required by the operation does not exist."""

    kind = ErrorKind.RESOURCE_NOT_FOUND


class DuplicateResourceError(CatalogError):
    """An entity with the same natural key already exists."""

    kind = ErrorKind.DUPLICATE_RESOURCE


class PublicationIntegrityError(RuntimeError):
    """A write would leave a book without any linked author."""
