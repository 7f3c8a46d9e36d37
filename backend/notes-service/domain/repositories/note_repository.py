"""Note repository interface for the GitHub notes application.

This module defines the repository interface for note operations
following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.note import Note
    from domain.entities.search import NoteSearchCriteria
    from sqlalchemy.orm import Session


class NoteRepository(ABC):
    """Abstract repository interface for note operations.

    This interface defines the contract for note repositories,
    allowing different implementations (e.g., SQLAlchemy, in-memory, etc.)
    while keeping the domain layer independent of infrastructure concerns.

    Implementations stage changes in the session and never commit:
    transaction boundaries belong to the calling service.
    """

    @abstractmethod
    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Create a new note in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note as stored

        Raises:
            SQLAlchemyError: If creation fails at the data layer
        """
        pass

    @abstractmethod
    async def get_note_by_id(
        self, db_session: Session, note_id: UUID, user_id: str
    ) -> Optional[Note]:
        """Get a note by ID if it is owned by the user.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note_id (UUID): UUID of the note to retrieve
            user_id (str): Identifier of the user requesting the note

        Returns:
            Optional[Note]: Note with its associated pull requests if found and
            owned by the user, None otherwise

        Raises:
            SQLAlchemyError: If retrieval fails at the data layer
        """
        pass

    @abstractmethod
    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Update the scalar fields of an existing note.

        Associations are not touched; they are handled by the
        note/pull request association repository.

        Args:
            db_session: SQLAlchemy database session for this operation
            note: Domain Note entity with updates

        Returns:
            Note: Updated note

        Raises:
            NoteNotFoundError: If the note does not exist for its owner
            SQLAlchemyError: If update fails at the data layer
        """
        pass

    @abstractmethod
    async def delete_note(
        self, db_session: Session, note_id: UUID, user_id: str
    ) -> bool:
        """Delete a note together with its pull request associations.

        Cached pull request records are left in place.

        Args:
            db_session: SQLAlchemy database session for this operation
            note_id: UUID of the note to delete
            user_id: Identifier of the user attempting deletion

        Returns:
            bool: True if deletion successful, False if note not found

        Raises:
            SQLAlchemyError: If deletion fails at the data layer
        """
        pass

    @abstractmethod
    async def list_notes(
        self, db_session: Session, criteria: NoteSearchCriteria
    ) -> Tuple[List[Note], int]:
        """Get a filtered, paginated list of a user's notes.

        Results are ordered by creation time, newest first.

        Args:
            db_session: SQLAlchemy database session for this operation
            criteria: Owner, filters and pagination

        Returns:
            Tuple[List[Note], int]: Notes for the page and total matching count

        Raises:
            SQLAlchemyError: If retrieval fails at the data layer
        """
        pass
