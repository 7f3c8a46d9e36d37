"""Repository interface for note to pull request links."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Set
from uuid import UUID

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class NotePullRequestRepository(ABC):
    """Abstract repository interface for the note/pull request association set."""

    @abstractmethod
    async def list_associations(self, db_session: Session, note_id: UUID) -> Set[UUID]:
        """Get the identifiers of the pull requests linked to a note.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note_id (UUID): Identifier of the note

        Returns:
            Set[UUID]: Linked pull request identifiers, empty when none
        """
        pass

    @abstractmethod
    async def replace_associations(
        self, db_session: Session, note_id: UUID, pull_request_ids: Iterable[UUID]
    ) -> None:
        """Replace the whole association set of a note.

        The change is applied to the session as a single unit: either
        every old link is replaced or nothing changes.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note_id (UUID): Identifier of the note
            pull_request_ids (Iterable[UUID]): New set of linked pull requests

        Raises:
            NoteNotFoundError: If the note does not exist
            NotFoundError: If one of the pull requests is not stored
        """
        pass
