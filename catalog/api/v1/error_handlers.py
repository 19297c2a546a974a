"""
Exception-to-response mapping for the HTTP API.

Domain errors are translated by their ErrorKind tag through a single
table. Request validation errors become 400 (not FastAPI's default 422) so
that every rejected input, whether caught by pydantic or by the domain,
surfaces the same way. Anything else is an unclassified failure: it is
logged with its traceback and answered with a generic 500 that leaks no
internals.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.domain.exceptions import CatalogError, ErrorKind
from catalog.api.v1 import schemas as api

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_RESOURCE: status.HTTP_409_CONFLICT,
}


def _error_response(status_code: int, body: api.ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump()),
    )


def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map a classified domain error to 400/404/409."""
    status_code = STATUS_BY_KIND[exc.kind]
    logger.info(
        f"{request.method} {request.url.path} -> {status_code} ({exc.kind.value}): {exc}"
    )
    return _error_response(
        status_code,
        api.ApiResponse(success=False, message=str(exc)),
    )


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn pydantic request errors into a 400 with one FieldError each."""
    errors = [
        api.FieldError(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        api.ApiResponse(success=False, message="Invalid request", errors=errors),
    )


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the failure and answer a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        api.ApiResponse(success=False, message="Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the catalog's exception handlers on ``app``."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
