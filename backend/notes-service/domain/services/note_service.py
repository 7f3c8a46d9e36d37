"""Note domain service for the GitHub notes application.

This module contains the NoteService that orchestrates note operations
and their pull request associations following Domain-Driven Design
principles.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple
from uuid import UUID

from domain.entities.note import Note, validate_title
from domain.entities.pull_request import PullRequestRef
from domain.entities.search import NoteSearchCriteria, PaginationMetadata
from domain.exceptions import DomainError, NoteError, NoteNotFoundError

if TYPE_CHECKING:
    from domain.repositories.note_repository import NoteRepository
    from domain.services.association_manager import AssociationManager
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class NoteService:
    """Domain service for handling note operations.

    This service owns the unit of work of every note operation: the
    repositories and the association manager only stage changes in the
    session, and the service commits once everything succeeded or rolls
    the whole operation back.
    """

    def __init__(
        self,
        note_repository: "NoteRepository",
        association_manager: "AssociationManager",
    ):
        """Initialize the note service with dependencies.

        Args:
            note_repository: Repository for performing note operations
            association_manager: Service reconciling pull request links
        """
        self._note_repository = note_repository
        self._association_manager = association_manager

    async def create_note(
        self,
        db_session: "Session",
        owner_id: str,
        title: str,
        content: Optional[str],
        pull_request_ref: Optional[PullRequestRef] = None,
    ) -> Note:
        """Create a new note, linking it to a pull request when requested.

        Args:
            db_session: Database session for this operation
            owner_id: Identifier of the note owner
            title: Note title
            content: Note content
            pull_request_ref: Optional pull request to link

        Returns:
            Note: Created note with its resolved associations

        Raises:
            InvalidArgumentError: If title or reference are invalid
            PreconditionFailedError: If a PR is requested without a stored token
            NotFoundError: If the pull request does not exist
            RemoteServiceError: If GitHub rejects or fails the request
            NoteError: If creation fails at the storage layer
        """
        logger.info(
            f"Creating note for user {owner_id}"
            + (f" linked to {pull_request_ref}" if pull_request_ref else "")
        )

        note = Note.from_creation_request(
            title=title,
            content=content,
            owner_id=owner_id,
            pull_request_ref=pull_request_ref,
        )

        try:
            created_note = await self._note_repository.create_note(db_session, note)

            if pull_request_ref is not None:
                await self._association_manager.reconcile(
                    db_session, created_note, pull_request_ref
                )

            db_session.commit()

        except DomainError as e:
            db_session.rollback()
            logger.warning(f"Failed to create note for user {owner_id}: {str(e)}")
            raise
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create note for user {owner_id}: {str(e)}")
            raise NoteError(f"Failed to create note: {str(e)}") from e

        logger.info(f"Successfully created note {note.id}")
        return await self._reload(db_session, note.id, owner_id)

    async def get_note(
        self, db_session: "Session", note_id: UUID, user_id: str
    ) -> Note:
        """Get a note by ID scoped to its owner.

        Args:
            db_session: Database session for this operation
            note_id: UUID of the note to retrieve
            user_id: Identifier of the user requesting the note

        Returns:
            Note: Retrieved note with its associations

        Raises:
            NoteNotFoundError: If note not found or owned by another user
        """
        logger.info(f"Getting note {note_id} for user {user_id}")

        try:
            note = await self._note_repository.get_note_by_id(
                db_session, note_id, user_id
            )
        except Exception as e:
            logger.error(f"Failed to get note {note_id}: {str(e)}")
            raise NoteError(f"Failed to retrieve note: {str(e)}") from e

        if not note:
            raise NoteNotFoundError(f"Note {note_id} not found")

        return note

    async def update_note(
        self,
        db_session: "Session",
        note_id: UUID,
        user_id: str,
        title: str,
        content: Optional[str],
        pull_request_ref: Optional[PullRequestRef] = None,
    ) -> Note:
        """Overwrite a note and reconcile its pull request link.

        The link is reconciled on every update, also when the reference did
        not change; an unchanged reference resolves from the cache.

        Args:
            db_session: Database session for this operation
            note_id: UUID of the note to update
            user_id: Identifier of the user attempting the update
            title: New title
            content: New content
            pull_request_ref: New pull request reference, None to unlink

        Returns:
            Note: Updated note with its associations

        Raises:
            NoteNotFoundError: If note not found or owned by another user
            InvalidArgumentError: If update data is invalid
            PreconditionFailedError: If a PR is requested without a stored token
            RemoteServiceError: If GitHub rejects or fails the request
            NoteError: If update fails at the storage layer
        """
        logger.info(f"Updating note {note_id} for user {user_id}")

        validate_title(title)

        try:
            existing_note = await self._note_repository.get_note_by_id(
                db_session, note_id, user_id
            )

            if not existing_note:
                raise NoteNotFoundError(f"Note {note_id} not found")

            existing_note.update_content(
                title=title, content=content, pull_request_ref=pull_request_ref
            )

            await self._note_repository.update_note(db_session, existing_note)
            await self._association_manager.reconcile(
                db_session, existing_note, pull_request_ref
            )

            db_session.commit()

        except DomainError as e:
            db_session.rollback()
            logger.warning(
                f"Failed to update note {note_id} for user {user_id}: {str(e)}"
            )
            raise
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update note {note_id}: {str(e)}")
            raise NoteError(f"Failed to update note: {str(e)}") from e

        logger.info(f"Successfully updated note {note_id}")
        return await self._reload(db_session, note_id, user_id)

    async def delete_note(
        self, db_session: "Session", note_id: UUID, user_id: str
    ) -> None:
        """Delete a note and its pull request links.

        Args:
            db_session: Database session for this operation
            note_id: UUID of the note to delete
            user_id: Identifier of the user attempting deletion

        Raises:
            NoteNotFoundError: If note not found or owned by another user
            NoteError: If deletion fails; the note is left in place
        """
        logger.info(f"Deleting note {note_id} for user {user_id}")

        try:
            existing_note = await self._note_repository.get_note_by_id(
                db_session, note_id, user_id
            )

            if not existing_note:
                raise NoteNotFoundError(f"Note {note_id} not found")

            await self._association_manager.reconcile(db_session, existing_note, None)

            deleted = await self._note_repository.delete_note(
                db_session, note_id, user_id
            )
            if not deleted:
                raise NoteNotFoundError(f"Note {note_id} not found")

            db_session.commit()

        except DomainError as e:
            db_session.rollback()
            logger.warning(
                f"Failed to delete note {note_id} for user {user_id}: {str(e)}"
            )
            raise
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete note {note_id}: {str(e)}")
            raise NoteError(f"Failed to delete note: {str(e)}") from e

        logger.info(f"Successfully deleted note {note_id}")

    async def list_notes(
        self, db_session: "Session", criteria: NoteSearchCriteria
    ) -> Tuple[List[Note], PaginationMetadata]:
        """Get a filtered, paginated list of the user's notes.

        Args:
            db_session: Database session for this operation
            criteria: Owner, filters and pagination

        Returns:
            Tuple containing notes and pagination metadata

        Raises:
            NoteError: If retrieval fails
        """
        try:
            notes, total_count = await self._note_repository.list_notes(
                db_session, criteria
            )
        except Exception as e:
            logger.error(f"Failed to list notes for user {criteria.user_id}: {str(e)}")
            raise NoteError(f"Failed to retrieve notes: {str(e)}") from e

        pagination = PaginationMetadata.calculate(
            current_page=criteria.page,
            total_notes=total_count,
            notes_per_page=criteria.limit,
        )

        logger.info(f"Retrieved {len(notes)} notes for user {criteria.user_id}")
        return notes, pagination

    async def _reload(self, db_session: "Session", note_id: UUID, user_id: str) -> Note:
        """Read a note back after commit so associations reflect storage."""
        return await self.get_note(db_session, note_id, user_id)
