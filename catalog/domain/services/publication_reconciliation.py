"""
Publication reconciliation.

When a book's author list changes, the persisted links are brought in line
with the requested list using the smallest set of writes:

    to_add    = desired - current
    to_remove = current - desired

All insertions happen before any deletion, so a book whose author list is
replaced wholesale (desired and current disjoint) still has at least one
link at every intermediate step. Links present in both sets are left
untouched: they are neither deleted nor re-inserted, and keep their
creation attribution.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from catalog.domain.entities import Publication
from catalog.domain.exceptions import PublicationIntegrityError
from catalog.domain.ports import PublicationRepository
from catalog.domain.value_objects import PublicationChanges

logger = logging.getLogger(__name__)


def plan_publication_changes(
    current: Iterable[str],
    desired: Iterable[str],
) -> PublicationChanges:
    """
    Compute the link changes between two author-name collections.

    Names are compared by exact string equality. Duplicates are collapsed;
    additions keep the order in which they appear in ``desired``.

    Args:
        current: Author names currently linked to the book
        desired: Author names the book should end up linked to

    Returns:
        PublicationChanges; empty when both collections hold the same set
    """
    current_names = set(current)
    desired_names = list(dict.fromkeys(desired))

    to_add = tuple(name for name in desired_names if name not in current_names)
    to_remove = tuple(sorted(current_names.difference(desired_names)))

    return PublicationChanges(to_add=to_add, to_remove=to_remove)


class PublicationReconciler:
    """
    Applies a PublicationChanges plan to a publication repository.

    The reconciler does not open or commit transactions; it runs inside the
    caller's unit of work so that the book update and its link changes
    commit together.
    """

    def __init__(self, publications: PublicationRepository) -> None:
        self._publications = publications

    def reconcile(
        self,
        book_title: str,
        desired: Iterable[str],
        actor: str,
        now: Optional[datetime] = None,
    ) -> PublicationChanges:
        """
        Make the book's links match ``desired``.

        Args:
            book_title: Title of the (existing) book
            desired: Author names the book must be linked to; non-empty and
                all existing, as checked by the caller
            actor: Attribution for newly created links
            now: Creation timestamp for new links

        Returns:
            The applied plan

        Raises:
            PublicationIntegrityError: If a deletion would leave the book
                with no author
        """
        current = [
            publication.author_name
            for publication in self._publications.find_by_book_title(book_title)
        ]
        changes = plan_publication_changes(current, desired)

        if changes.is_empty():
            logger.debug(f"Authors of '{book_title}' unchanged, no link writes")
            return changes

        logger.debug(
            f"Reconciling authors of '{book_title}': "
            f"add={list(changes.to_add)} remove={list(changes.to_remove)}"
        )

        # Insert before delete
        for author_name in changes.to_add:
            self._publications.insert(
                Publication.create_new(book_title, author_name, actor, now)
            )

        for author_name in changes.to_remove:
            self._ensure_other_link_remains(book_title, author_name)
            self._publications.delete_by_book_title_and_author_name(
                book_title, author_name
            )

        return changes

    def _ensure_other_link_remains(self, book_title: str, author_name: str) -> None:
        if self._publications.count_by_book_title(book_title) <= 1:
            raise PublicationIntegrityError(
                f"Removing '{author_name}' would leave '{book_title}' without authors"
            )
