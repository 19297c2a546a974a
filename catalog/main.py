"""
Main application entry point.
"""

import logging
import os

from fastapi import FastAPI

from catalog.api.v1.author_endpoints import router as author_router
from catalog.api.v1.book_endpoints import router as book_router
from catalog.api.v1.error_handlers import register_exception_handlers

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title="Book Catalog API",
    description="Books, authors and the publications linking them.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

# Include API routers
app.include_router(author_router, prefix="/api/v1", tags=["authors"])
app.include_router(book_router, prefix="/api/v1", tags=["books"])


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Book Catalog API",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


@app.get("/api/v1/health")
def health_check() -> dict:
    """Liveness probe."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("catalog.main:app", host="0.0.0.0", port=8000, reload=True)
