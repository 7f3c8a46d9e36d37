"""Search domain entities for the GitHub notes application.

This module contains the domain entities for listing notes, representing
the filters and pagination used when querying a user's notes.
"""

from dataclasses import dataclass
from typing import Optional

from domain.exceptions import InvalidArgumentError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class NoteSearchCriteria:
    """Domain entity representing the filters for listing notes.

    Attributes:
        user_id: Identifier of the user whose notes are listed
        query: Case-insensitive substring matched against title and content
        pr_number: PR number the note references
        pr_state: State of a linked pull request ("open", "closed", ...)
        page: Page number for pagination (1-based)
        limit: Number of results per page
    """

    user_id: str
    query: Optional[str] = None
    pr_number: Optional[int] = None
    pr_state: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """Validate and normalize criteria after initialization."""
        if self.page < 1:
            raise InvalidArgumentError("Page number must be at least 1")
        if self.limit < 1 or self.limit > MAX_PAGE_SIZE:
            raise InvalidArgumentError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if self.query is not None:
            self.query = self.query.strip() or None
        if self.pr_state is not None:
            self.pr_state = self.pr_state.strip() or None

    @property
    def offset(self) -> int:
        """Calculate the offset for database pagination."""
        return (self.page - 1) * self.limit

    def has_text_search(self) -> bool:
        return self.query is not None

    def has_pr_number_filter(self) -> bool:
        return self.pr_number is not None

    def has_pr_state_filter(self) -> bool:
        return self.pr_state is not None


@dataclass
class PaginationMetadata:
    """Domain entity representing pagination information for list results.

    Attributes:
        current_page: Current page number
        total_pages: Total number of pages
        total_notes: Total number of notes found
        notes_per_page: Number of notes per page
        has_next: Whether there is a next page
        has_previous: Whether there is a previous page
    """

    current_page: int
    total_pages: int
    total_notes: int
    notes_per_page: int
    has_next: bool
    has_previous: bool

    @classmethod
    def calculate(
        cls, current_page: int, total_notes: int, notes_per_page: int
    ) -> "PaginationMetadata":
        """Calculate pagination metadata from basic parameters.

        Args:
            current_page: The current page number (1-based)
            total_notes: Total number of notes found
            notes_per_page: Number of notes per page

        Returns:
            PaginationMetadata: Calculated pagination information
        """
        total_pages = (
            (total_notes + notes_per_page - 1) // notes_per_page
            if total_notes > 0
            else 1
        )
        has_next = current_page < total_pages
        has_previous = current_page > 1

        return cls(
            current_page=current_page,
            total_pages=total_pages,
            total_notes=total_notes,
            notes_per_page=notes_per_page,
            has_next=has_next,
            has_previous=has_previous,
        )
