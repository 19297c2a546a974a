"""
API endpoints for books.

This module defines the FastAPI routes for creating, updating, reading and
deleting books. It handles HTTP concerns and delegates to BookService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from catalog.domain.exceptions import ResourceNotFoundError
from catalog.domain.services import BookService
from catalog.api.v1 import schemas as api
from catalog.api.v1.converters import api_status_to_domain, domain_book_to_api
from catalog.api.v1.dependencies import get_actor, get_book_service

router = APIRouter(prefix="/books")


@router.post(
    "",
    response_model=api.ApiResponse[api.BookResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_book(
    request: api.BookCreateRequest,
    actor: str = Depends(get_actor),
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[api.BookResponse]:
    """
    Register a new book linked to existing authors.

    Raises:
        400: Invalid fields or empty author list
        404: One of the authors does not exist
        409: A book with this title already exists
    """
    service.create_book(
        title=request.title,
        price=request.price,
        publication_status=api_status_to_domain(request.publication_status),
        author_names=request.authors,
        actor=actor,
    )
    return api.ApiResponse(
        success=True,
        data=_load_book(service, request.title),
        message="Book created",
    )


@router.put("/{title}", response_model=api.ApiResponse[api.BookResponse])
def update_book(
    title: str,
    request: api.BookUpdateRequest,
    actor: str = Depends(get_actor),
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[api.BookResponse]:
    """
    Update price, status and authors of a book.

    Raises:
        400: Invalid fields, or reverting a published book to unpublished
        404: Book or one of the authors not found
    """
    service.update_book(
        title=title,
        price=request.price,
        publication_status=api_status_to_domain(request.publication_status),
        author_names=request.authors,
        actor=actor,
    )
    return api.ApiResponse(
        success=True,
        data=_load_book(service, title),
        message="Book updated",
    )


@router.get("", response_model=api.ApiResponse[list[api.BookResponse]])
def list_books(
    status_filter: Optional[api.PublicationStatusName] = Query(default=None, alias="status"),
    author: Optional[str] = Query(default=None),
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[list[api.BookResponse]]:
    """
    List books ordered by title, optionally filtered by status and/or author.
    """
    books = service.list_books(
        publication_status=api_status_to_domain(status_filter),
        author_name=author,
    )
    return api.ApiResponse(
        success=True,
        data=[domain_book_to_api(book) for book in books],
    )


@router.get("/{title}", response_model=api.ApiResponse[api.BookResponse])
def get_book(
    title: str,
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[api.BookResponse]:
    """
    Get a book and its authors.

    Raises:
        404: Book not found
    """
    return api.ApiResponse(success=True, data=_load_book(service, title))


@router.delete("/{title}", response_model=api.ApiResponse[None])
def delete_book(
    title: str,
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[None]:
    """
    Delete a book and its publication links.

    Raises:
        404: Book not found
    """
    service.delete_by_title(title)
    return api.ApiResponse(success=True, message="Book deleted")


def _load_book(service: BookService, title: str) -> api.BookResponse:
    book = service.get_book_with_authors(title)
    if book is None:
        raise ResourceNotFoundError(f"Book not found: {title}")
    return domain_book_to_api(book)
