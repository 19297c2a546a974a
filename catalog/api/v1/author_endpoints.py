"""
API endpoints for authors.

This module defines the FastAPI routes for creating, updating, reading and
deleting authors, and for listing an author's books. It handles HTTP
concerns and delegates to domain services; domain errors are translated by
the handlers in error_handlers.py.
"""

from fastapi import APIRouter, Depends, status

from catalog.domain.exceptions import ResourceNotFoundError
from catalog.domain.services import AuthorService, BookService
from catalog.api.v1 import schemas as api
from catalog.api.v1.converters import domain_author_to_api, domain_book_to_api
from catalog.api.v1.dependencies import get_actor, get_author_service, get_book_service

router = APIRouter(prefix="/authors")


@router.post(
    "",
    response_model=api.ApiResponse[api.AuthorResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_author(
    request: api.AuthorCreateRequest,
    actor: str = Depends(get_actor),
    service: AuthorService = Depends(get_author_service),
) -> api.ApiResponse[api.AuthorResponse]:
    """
    Register a new author.

    Raises:
        400: Blank name or birth date not in the past
        409: An author with this name already exists
    """
    author = service.create_author(request.name, request.birth_date, actor)
    return api.ApiResponse(
        success=True,
        data=domain_author_to_api(author),
        message="Author created",
    )


@router.put("/{name}", response_model=api.ApiResponse[api.AuthorResponse])
def update_author(
    name: str,
    request: api.AuthorUpdateRequest,
    actor: str = Depends(get_actor),
    service: AuthorService = Depends(get_author_service),
) -> api.ApiResponse[api.AuthorResponse]:
    """
    Change an author's birth date.

    Raises:
        400: Birth date not in the past
        404: Author not found
    """
    author = service.update_author(name, request.birth_date, actor)
    return api.ApiResponse(
        success=True,
        data=domain_author_to_api(author),
        message="Author updated",
    )


@router.get("", response_model=api.ApiResponse[list[api.AuthorResponse]])
def list_authors(
    service: AuthorService = Depends(get_author_service),
) -> api.ApiResponse[list[api.AuthorResponse]]:
    """List all authors ordered by name."""
    return api.ApiResponse(
        success=True,
        data=[domain_author_to_api(author) for author in service.find_all()],
    )


@router.get("/{name}", response_model=api.ApiResponse[api.AuthorResponse])
def get_author(
    name: str,
    service: AuthorService = Depends(get_author_service),
) -> api.ApiResponse[api.AuthorResponse]:
    """
    Get an author by name.

    Raises:
        404: Author not found
    """
    author = service.find_by_name(name)
    if author is None:
        raise ResourceNotFoundError(f"Author not found: {name}")

    return api.ApiResponse(success=True, data=domain_author_to_api(author))


@router.delete("/{name}", response_model=api.ApiResponse[None])
def delete_author(
    name: str,
    service: AuthorService = Depends(get_author_service),
) -> api.ApiResponse[None]:
    """
    Delete an author and their publication links.

    Raises:
        404: Author not found
    """
    service.delete_by_name(name)
    return api.ApiResponse(success=True, message="Author deleted")


@router.get("/{name}/books", response_model=api.ApiResponse[list[api.BookResponse]])
def get_author_books(
    name: str,
    service: BookService = Depends(get_book_service),
) -> api.ApiResponse[list[api.BookResponse]]:
    """
    List the books of an author, with all their authors.

    Raises:
        404: Author not found
    """
    books = service.get_books_by_author(name)
    return api.ApiResponse(
        success=True,
        data=[domain_book_to_api(book) for book in books],
    )
