"""Note output schemas for API responses.

This module contains Pydantic models for note-related API responses,
including single notes, pagination info, and note lists.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from application.rest.schemas.output.pull_request_output import PullRequestResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.note import Note
    from domain.entities.search import PaginationMetadata


class NoteResponse(BaseModel):
    """Schema for note data in API responses.

    Attributes:
        id (str): UUID string identifier of the note.
        title (str): The title of the note.
        content (str): The content/body of the note.
        owner_id (str): Identifier of the note owner.
        repo_owner (str, optional): Requested repository owner.
        repo_name (str, optional): Requested repository name.
        github_pr_number (int, optional): Requested pull request number.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last updated.
        pull_requests (List[PullRequestResponse]): Pull requests linked to the note.

    Example:
        >>> note_response = NoteResponse(
        ...     id="note-uuid-123",
        ...     title="Review feedback",
        ...     content="Check error handling",
        ...     owner_id="user-1",
        ...     repo_owner="acme",
        ...     repo_name="widgets",
        ...     github_pr_number=42,
        ...     created_at=datetime.now(),
        ...     updated_at=datetime.now(),
        ...     pull_requests=[],
        ... )
    """

    id: str  # UUID as string
    title: str
    content: str
    owner_id: str
    repo_owner: Optional[str] = None
    repo_name: Optional[str] = None
    github_pr_number: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    pull_requests: List[PullRequestResponse]

    @classmethod
    def from_entity(cls, note: Note) -> NoteResponse:
        """Create NoteResponse from Note domain entity.

        Args:
            note: The domain Note entity to convert

        Returns:
            NoteResponse: The converted note response schema
        """
        ref = note.pull_request_ref
        return cls(
            id=str(note.id),
            title=note.title,
            content=note.content,
            owner_id=note.owner_id,
            repo_owner=ref.repo_owner if ref else None,
            repo_name=ref.repo_name if ref else None,
            github_pr_number=ref.number if ref else None,
            created_at=note.created_at,
            updated_at=note.updated_at,
            pull_requests=[
                PullRequestResponse.from_entity(pull_request)
                for pull_request in note.pull_requests
            ],
        )


class PaginationInfo(BaseModel):
    """Schema for pagination metadata in API responses.

    Attributes:
        current_page (int): Current page number (1-indexed).
        total_pages (int): Total number of pages available.
        total_notes (int): Total number of notes across all pages.
        notes_per_page (int): Number of notes per page.
        has_next (bool): Whether there is a next page available.
        has_previous (bool): Whether there is a previous page available.
    """

    current_page: int
    total_pages: int
    total_notes: int
    notes_per_page: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_entity(cls, pagination_metadata: PaginationMetadata) -> PaginationInfo:
        """Convert domain PaginationMetadata to API response PaginationInfo.

        Args:
            pagination_metadata: Domain pagination metadata entity.

        Returns:
            PaginationInfo: Corresponding API response model.
        """
        return cls(
            current_page=pagination_metadata.current_page,
            total_pages=pagination_metadata.total_pages,
            total_notes=pagination_metadata.total_notes,
            notes_per_page=pagination_metadata.notes_per_page,
            has_next=pagination_metadata.has_next,
            has_previous=pagination_metadata.has_previous,
        )


class NotesListResponse(BaseModel):
    """Schema for paginated notes list API responses.

    Attributes:
        notes (List[NoteResponse]): List of notes for the current page.
        pagination (PaginationInfo): Pagination metadata.
    """

    notes: List[NoteResponse]
    pagination: PaginationInfo

    @classmethod
    def from_entities(
        cls, notes: List[Note], pagination: PaginationMetadata
    ) -> NotesListResponse:
        """Build the list response from domain notes and pagination metadata."""
        return cls(
            notes=[NoteResponse.from_entity(note) for note in notes],
            pagination=PaginationInfo.from_entity(pagination),
        )
