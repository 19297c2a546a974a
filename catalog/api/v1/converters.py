"""
Converters between domain entities/value objects and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, maintaining clean separation of concerns.
"""

from dataclasses import asdict
from typing import Optional

from catalog.domain import entities as domain
from catalog.domain import value_objects as domain_vo
from catalog.api.v1 import schemas as api


def domain_author_to_api(author: domain.Author) -> api.AuthorResponse:
    """
    Convert a domain Author entity to an API AuthorResponse model.

    Args:
        author: Domain Author entity

    Returns:
        API AuthorResponse model
    """
    return api.AuthorResponse(**asdict(author))


def domain_book_to_api(book_with_authors: domain_vo.BookWithAuthors) -> api.BookResponse:
    """
    Convert a domain BookWithAuthors value object to an API BookResponse model.

    Args:
        book_with_authors: Book and its sorted author names

    Returns:
        API BookResponse model
    """
    book = book_with_authors.book
    return api.BookResponse(
        title=book.title,
        price=book.price,
        publication_status=book.publication_status.value,
        authors=list(book_with_authors.authors),
        created_at=book.created_at,
        created_by=book.created_by,
        updated_at=book.updated_at,
        updated_by=book.updated_by,
    )


def api_status_to_domain(status: Optional[str]) -> Optional[domain.PublicationStatus]:
    """
    Convert an API publication status name to the domain enum.

    Args:
        status: "UNPUBLISHED", "PUBLISHED" or None

    Returns:
        Domain PublicationStatus, or None when no status was given
    """
    if status is None:
        return None
    return domain.PublicationStatus(status)
