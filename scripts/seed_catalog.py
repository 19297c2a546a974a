#!/usr/bin/env python3
"""
Catalog Seeding Script.

This script loads authors and books from a JSON file into the catalog
database, going through the domain services so every rule applies.

Input format:
    {
        "authors": [{"name": "夏目漱石", "birth_date": "1867-02-09"}],
        "books": [{"title": "こころ", "price": "500",
                   "publication_status": "PUBLISHED", "authors": ["夏目漱石"]}]
    }

Usage:
    python -m scripts.seed_catalog --file data/seed.json --db-path data/catalog.db
"""

import argparse
import json
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

from catalog.domain.entities import PublicationStatus
from catalog.domain.exceptions import CatalogError, DuplicateResourceError
from catalog.domain.services import AuthorService, BookService
from catalog.infrastructure.db.sqlite_unit_of_work import sqlite_uow_factory

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("data/catalog.db")


def seed(payload: dict, author_service: AuthorService, book_service: BookService,
         actor: str = "seed") -> dict:
    """
    Create every author, then every book, from ``payload``.

    Records that already exist are skipped; records the domain rejects are
    counted as errors and the run continues.

    Returns:
        Counts per outcome: {"created": n, "skipped": n, "errors": n}
    """
    counts = {"created": 0, "skipped": 0, "errors": 0}

    for record in payload.get("authors", []):
        try:
            author_service.create_author(
                record["name"], date.fromisoformat(record["birth_date"]), actor
            )
            counts["created"] += 1
        except DuplicateResourceError:
            logger.info(f"Author '{record['name']}' already exists, skipping")
            counts["skipped"] += 1
        except (CatalogError, KeyError, ValueError) as e:
            logger.error(f"Rejected author {record!r}: {e}")
            counts["errors"] += 1

    for record in payload.get("books", []):
        try:
            book_service.create_book(
                record["title"],
                Decimal(str(record["price"])),
                PublicationStatus(record.get("publication_status", "UNPUBLISHED")),
                record["authors"],
                actor,
            )
            counts["created"] += 1
        except DuplicateResourceError:
            logger.info(f"Book '{record['title']}' already exists, skipping")
            counts["skipped"] += 1
        except (CatalogError, KeyError, ValueError, ArithmeticError) as e:
            logger.error(f"Rejected book {record!r}: {e}")
            counts["errors"] += 1

    return counts


def main(file_path: Path, db_path: Path = DEFAULT_DB_PATH, actor: str = "seed") -> int:
    """
    Main entry point for the seeding script.

    Returns:
        Process exit code: 0 when every record was created or skipped
    """
    logger.info(f"Seeding {db_path} from {file_path}")

    with file_path.open(encoding="utf-8") as fh:
        payload = json.load(fh)

    uow_factory = sqlite_uow_factory(db_path)
    counts = seed(payload, AuthorService(uow_factory), BookService(uow_factory), actor)

    logger.info(
        f"Seeding finished: created={counts['created']} "
        f"skipped={counts['skipped']} errors={counts['errors']}"
    )
    return 1 if counts["errors"] else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the book catalog from a JSON file")
    parser.add_argument(
        "--file", "-f",
        type=Path,
        required=True,
        help="JSON file with 'authors' and 'books' lists"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite database file (default: {DEFAULT_DB_PATH})"
    )
    parser.add_argument(
        "--actor",
        type=str,
        default="seed",
        help="Attribution recorded on created rows (default: seed)"
    )

    args = parser.parse_args()
    sys.exit(main(args.file, args.db_path, args.actor))
