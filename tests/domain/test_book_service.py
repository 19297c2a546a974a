"""
Tests for BookService against in-memory fake repositories.

Verifies validation order, the publication-status transition rule and the
author-link maintenance done on create and update.
"""

from datetime import date
from decimal import Decimal

import pytest

from catalog.domain.entities import PublicationStatus
from catalog.domain.exceptions import (
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)

UNPUBLISHED = PublicationStatus.UNPUBLISHED
PUBLISHED = PublicationStatus.PUBLISHED


@pytest.fixture
def authors(author_service):
    """Pre-created authors."""
    names = ["夏目漱石", "A", "B", "C"]
    for name in names:
        author_service.create_author(name, date(1867, 2, 9))
    return names


class TestCreateBook:

    def test_create_links_all_authors(self, book_service, authors):
        book = book_service.create_book("Book", Decimal("1200"), UNPUBLISHED, ["C", "A"], "alice")

        assert book.title == "Book"
        assert book.created_by == "alice"
        assert book_service.get_authors_for_book("Book") == ["A", "C"]

    def test_publications_share_book_timestamp_and_actor(self, book_service, authors, uow):
        book = book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "B"], "alice")

        links = uow.publications.find_by_book_title("Book")
        assert {p.created_at for p in links} == {book.created_at}
        assert {p.created_by for p in links} == {"alice"}

    def test_initial_status_is_caller_supplied(self, book_service, authors):
        book = book_service.create_book("Book", Decimal("1"), PUBLISHED, ["A"])
        assert book.publication_status is PUBLISHED

    def test_zero_price_succeeds(self, book_service, authors):
        book_service.create_book("Free", Decimal("0"), UNPUBLISHED, ["A"])
        assert book_service.exists_by_title("Free")

    def test_negative_price_fails(self, book_service, authors):
        with pytest.raises(InvalidArgumentError):
            book_service.create_book("Cheap", Decimal("-0.01"), UNPUBLISHED, ["A"])

    def test_blank_title_fails(self, book_service, authors):
        with pytest.raises(InvalidArgumentError, match="Book title is required"):
            book_service.create_book("  ", Decimal("1"), UNPUBLISHED, ["A"])

    def test_empty_author_list_fails_before_existence_checks(self, book_service, uow):
        """No author exists at all, yet the empty list is what gets reported."""
        with pytest.raises(InvalidArgumentError, match="at least one author"):
            book_service.create_book("Book", Decimal("1"), UNPUBLISHED, [])

        assert uow.commits == 0 and uow.rollbacks == 0

    def test_blank_author_name_fails(self, book_service, authors):
        with pytest.raises(InvalidArgumentError, match="Author name is required"):
            book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", " "])

    def test_duplicate_title_fails(self, book_service, authors):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A"])

        with pytest.raises(DuplicateResourceError, match="Book already exists"):
            book_service.create_book("Book", Decimal("2"), UNPUBLISHED, ["B"])

        assert book_service.find_by_title("Book").price == Decimal("1")

    def test_unknown_author_fails_without_persisting(self, book_service, authors, uow):
        with pytest.raises(ResourceNotFoundError, match="Author not found: Ghost"):
            book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "Ghost"])

        assert not book_service.exists_by_title("Book")
        assert uow.books.insert_calls == []
        assert uow.publications.writes == []

    def test_authors_checked_in_input_order(self, book_service, authors):
        with pytest.raises(ResourceNotFoundError, match="Ghost2"):
            book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["Ghost2", "Ghost1"])

    def test_duplicate_author_names_are_collapsed(self, book_service, authors):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "A", "B"])
        assert book_service.get_authors_for_book("Book") == ["A", "B"]


class TestUpdateBook:

    def test_kokoro_publication_scenario(self, book_service, authors):
        book_service.create_book("こころ", Decimal("500"), UNPUBLISHED, ["夏目漱石"])

        published = book_service.update_book("こころ", Decimal("500"), PUBLISHED, ["夏目漱石"])
        assert published.publication_status is PUBLISHED

        with pytest.raises(InvalidArgumentError, match="Cannot revert a published book"):
            book_service.update_book("こころ", Decimal("500"), UNPUBLISHED, ["夏目漱石"])

        assert book_service.find_by_title("こころ").publication_status is PUBLISHED

    def test_rejected_transition_performs_no_writes(self, book_service, authors, uow):
        book_service.create_book("Book", Decimal("1"), PUBLISHED, ["A"])
        uow.publications.writes.clear()

        with pytest.raises(InvalidArgumentError):
            book_service.update_book("Book", Decimal("9"), UNPUBLISHED, ["B"])

        assert uow.books.update_calls == []
        assert uow.publications.writes == []
        assert book_service.get_authors_for_book("Book") == ["A"]

    def test_republishing_is_allowed(self, book_service, authors):
        book_service.create_book("Book", Decimal("1"), PUBLISHED, ["A"])

        book = book_service.update_book("Book", Decimal("2"), PUBLISHED, ["A"])

        assert book.price == Decimal("2")

    def test_update_missing_book_fails(self, book_service, authors):
        with pytest.raises(ResourceNotFoundError, match="Book not found"):
            book_service.update_book("Missing", Decimal("1"), UNPUBLISHED, ["A"])

    def test_update_with_unknown_author_changes_nothing(self, book_service, authors, uow):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A"])

        with pytest.raises(ResourceNotFoundError, match="Ghost"):
            book_service.update_book("Book", Decimal("5"), PUBLISHED, ["A", "Ghost"])

        book = book_service.find_by_title("Book")
        assert book.price == Decimal("1")
        assert book.publication_status is UNPUBLISHED

    def test_update_with_same_authors_writes_no_publications(self, book_service, authors, uow):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "B"])
        uow.publications.writes.clear()

        book_service.update_book("Book", Decimal("2"), UNPUBLISHED, ["B", "A"])

        assert uow.publications.writes == []
        assert book_service.find_by_title("Book").price == Decimal("2")

    def test_update_reconciles_authors(self, book_service, authors, uow):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "B"], "alice")
        kept_before = uow.store.publications[("Book", "B")]
        uow.publications.writes.clear()

        book_service.update_book("Book", Decimal("1"), UNPUBLISHED, ["B", "C"], "bob")

        assert book_service.get_authors_for_book("Book") == ["B", "C"]
        assert uow.publications.writes == [("insert", "Book", "C"), ("delete", "Book", "A")]
        assert uow.store.publications[("Book", "B")] is kept_before
        assert uow.store.publications[("Book", "C")].created_by == "bob"

    def test_update_keeps_title_and_creation_attribution(self, book_service, authors):
        created = book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A"], "alice")

        updated = book_service.update_book("Book", Decimal("3"), PUBLISHED, ["A"], "bob")

        assert updated.title == "Book"
        assert updated.created_at == created.created_at
        assert updated.created_by == "alice"
        assert updated.updated_by == "bob"

    def test_update_validates_before_lookup(self, book_service):
        with pytest.raises(InvalidArgumentError):
            book_service.update_book("Missing", Decimal("-1"), UNPUBLISHED, ["A"])


class TestQueries:

    @pytest.fixture
    def catalog(self, book_service, authors):
        book_service.create_book("b-published", Decimal("1"), PUBLISHED, ["A"])
        book_service.create_book("a-draft", Decimal("1"), UNPUBLISHED, ["A", "B"])
        book_service.create_book("c-published", Decimal("1"), PUBLISHED, ["B"])

    def test_find_all_sorted_by_title(self, book_service, catalog):
        titles = [book.title for book in book_service.find_all()]
        assert titles == ["a-draft", "b-published", "c-published"]

    def test_find_by_publication_status(self, book_service, catalog):
        titles = [book.title for book in book_service.find_by_publication_status(PUBLISHED)]
        assert titles == ["b-published", "c-published"]

    def test_find_by_author_name(self, book_service, catalog):
        titles = [book.title for book in book_service.find_by_author_name("A")]
        assert titles == ["a-draft", "b-published"]

    def test_find_by_title_absent_returns_none(self, book_service, catalog):
        assert book_service.find_by_title("nope") is None
        assert book_service.get_book_with_authors("nope") is None

    def test_get_book_with_authors(self, book_service, catalog):
        result = book_service.get_book_with_authors("a-draft")

        assert result.book.title == "a-draft"
        assert result.authors == ("A", "B")

    def test_list_books_without_filters(self, book_service, catalog):
        assert len(book_service.list_books()) == 3

    def test_list_books_with_both_filters(self, book_service, catalog):
        result = book_service.list_books(publication_status=PUBLISHED, author_name="B")
        assert [item.book.title for item in result] == ["c-published"]

    def test_get_books_by_author(self, book_service, catalog):
        result = book_service.get_books_by_author("B")
        assert [(item.book.title, item.authors) for item in result] == [
            ("a-draft", ("A", "B")),
            ("c-published", ("B",)),
        ]

    def test_get_books_by_author_without_books_is_empty(self, book_service, catalog):
        assert book_service.get_books_by_author("C") == []

    def test_get_books_by_unknown_author_fails(self, book_service, catalog):
        with pytest.raises(ResourceNotFoundError):
            book_service.get_books_by_author("Ghost")


class TestDeleteBook:

    def test_delete_removes_book_and_links(self, book_service, authors, uow):
        book_service.create_book("Book", Decimal("1"), UNPUBLISHED, ["A", "B"])

        book_service.delete_by_title("Book")

        assert not book_service.exists_by_title("Book")
        assert uow.publications.find_by_author_name("A") == []

    def test_delete_missing_book_fails(self, book_service):
        with pytest.raises(ResourceNotFoundError):
            book_service.delete_by_title("Missing")
