"""Note input schemas for API requests.

This module contains Pydantic models for note-related API requests,
including note creation and update operations.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    """Schema for creating a new note.

    The pull request fields travel together: provide all three to link the
    note to a pull request, or none of them.

    Attributes:
        title (str): The title of the note.
        content (str): The content/body of the note.
        repo_owner (str, optional): Owner of the GitHub repository.
        repo_name (str, optional): Name of the GitHub repository.
        github_pr_number (int, optional): Number of the pull request.

    Example:
        >>> note_data = NoteCreate(
        ...     title="Review feedback",
        ...     content="Check error handling",
        ...     repo_owner="acme",
        ...     repo_name="widgets",
        ...     github_pr_number=42,
        ... )
    """

    title: str = Field(..., max_length=255)
    content: str = ""
    repo_owner: Optional[str] = Field(default=None, max_length=255)
    repo_name: Optional[str] = Field(default=None, max_length=255)
    github_pr_number: Optional[int] = None


class NoteUpdate(NoteCreate):
    """Schema for updating an existing note.

    Updates overwrite the whole note: omitting the pull request fields
    removes the link to the pull request.

    Example:
        >>> update_data = NoteUpdate(title="Updated Title", content="")
    """

    pass
