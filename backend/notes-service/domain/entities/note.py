"""Note domain entity for the GitHub notes application.

This module contains the core Note domain entity representing
a note in the system following Domain-Driven Design principles.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Set
from uuid import UUID, uuid4

from domain.entities.pull_request import PullRequestEntity, PullRequestRef
from domain.exceptions import InvalidArgumentError

TITLE_MAX_LENGTH = 255


def validate_title(title: str) -> str:
    if title is None or not title.strip():
        raise InvalidArgumentError("Note title cannot be empty")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Note title cannot be longer than {TITLE_MAX_LENGTH} characters"
        )
    return title


@dataclass
class Note:
    """Domain entity representing a note attached to GitHub pull requests.

    The pull request reference stored on the note is the hint the user
    sent with the last create/update request. The authoritative link state
    is ``pull_requests``, which the association manager maintains.

    Attributes:
        id (UUID): Unique identifier for the note.
        title (str): Title of the note.
        content (str): Free-text content of the note, may be empty.
        owner_id (str): Identifier of the user who owns the note.
        created_at (datetime): Timestamp when the note was created.
        updated_at (datetime): Timestamp when the note was last updated.
        pull_request_ref (Optional[PullRequestRef]): Requested PR reference.
        pull_requests (List[PullRequestEntity]): Associated pull requests.
    """

    id: UUID
    title: str
    content: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    pull_request_ref: Optional[PullRequestRef] = None
    pull_requests: List[PullRequestEntity] = field(default_factory=list)

    def __post_init__(self):
        """Validate note after initialization.

        Raises:
            InvalidArgumentError: If the title is empty or too long.
        """
        self.title = validate_title(self.title)
        if self.content is None:
            self.content = ""

    @classmethod
    def from_creation_request(
        cls,
        title: str,
        content: Optional[str],
        owner_id: str,
        pull_request_ref: Optional[PullRequestRef] = None,
    ) -> "Note":
        """Factory method to create a note from an API creation request.

        Args:
            title (str): Note title from request.
            content (Optional[str]): Note content from request.
            owner_id (str): Identifier of the user creating the note.
            pull_request_ref (Optional[PullRequestRef]): Optional PR reference.

        Returns:
            Note: New note instance with generated UUID, timestamps and an
            empty association set.

        Raises:
            InvalidArgumentError: If the title is invalid.
        """
        now = datetime.utcnow()
        return cls(
            id=uuid4(),
            title=title,
            content=(content or "").strip(),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            pull_request_ref=pull_request_ref,
            pull_requests=[],
        )

    def update_content(
        self,
        title: str,
        content: Optional[str],
        pull_request_ref: Optional[PullRequestRef],
    ) -> None:
        """Overwrite the note's title, content and PR reference.

        Args:
            title (str): New title for the note.
            content (Optional[str]): New content for the note.
            pull_request_ref (Optional[PullRequestRef]): New PR reference, None to clear.

        Raises:
            InvalidArgumentError: If the title is invalid.
        """
        self.title = validate_title(title)
        self.content = (content or "").strip()
        self.pull_request_ref = pull_request_ref
        self.updated_at = datetime.utcnow()

    def replace_pull_requests(self, pull_requests: List[PullRequestEntity]) -> None:
        """Replace the in-memory association set, dropping duplicate ids."""
        unique = {}
        for pull_request in pull_requests:
            unique.setdefault(pull_request.id, pull_request)
        self.pull_requests = list(unique.values())

    @property
    def pull_request_ids(self) -> Set[UUID]:
        return {pull_request.id for pull_request in self.pull_requests}
