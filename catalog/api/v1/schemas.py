"""
Pydantic models for the HTTP API.

Requests carry the user-supplied fields only; the acting user comes from
the X-Actor header and audit fields are set by the domain. Every response
is wrapped in ApiResponse.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

PublicationStatusName = Literal["UNPUBLISHED", "PUBLISHED"]


# response envelope

class FieldError(BaseModel):
    """One rejected request field."""
    field: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="Why the value was rejected")


class ApiResponse(BaseModel, Generic[T]):
    """
    Common wrapper for every API response, successful or not.
    """
    success: bool = Field(description="True when the operation succeeded")
    data: T | None = Field(default=None, description="Payload on success")
    message: str | None = Field(default=None, description="Human-readable outcome")
    errors: list[FieldError] | None = Field(
        default=None,
        description="Per-field validation errors (400 responses only)"
    )


# authors

class AuthorCreateRequest(BaseModel):
    """
    Request body for POST /authors.
    """
    name: str = Field(description="Author name (unique)")
    birth_date: date = Field(description="Date of birth, before today (YYYY-MM-DD)")


class AuthorUpdateRequest(BaseModel):
    """
    Request body for PUT /authors/{name}.
    """
    birth_date: date = Field(description="Date of birth, before today (YYYY-MM-DD)")


class AuthorResponse(BaseModel):
    """
    API representation of an Author entity.
    """
    name: str
    birth_date: date
    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str


# books

class BookCreateRequest(BaseModel):
    """
    Request body for POST /books.
    """
    title: str = Field(description="Book title (unique)")
    price: Decimal = Field(ge=0, description="Price, zero or greater")
    publication_status: PublicationStatusName = Field(description="Initial publication status")
    authors: list[str] = Field(min_length=1, description="Names of existing authors")


class BookUpdateRequest(BaseModel):
    """
    Request body for PUT /books/{title}. The title itself cannot change.
    """
    price: Decimal = Field(ge=0, description="Price, zero or greater")
    publication_status: PublicationStatusName = Field(
        description="New status; PUBLISHED books cannot go back to UNPUBLISHED"
    )
    authors: list[str] = Field(min_length=1, description="Complete new author list")


class BookResponse(BaseModel):
    """
    API representation of a Book with its authors.
    """
    title: str
    price: Decimal
    publication_status: PublicationStatusName
    authors: list[str] = Field(description="Author names, sorted ascending")
    created_at: datetime
    created_by: str
    updated_at: datetime
    updated_by: str
