"""SQLAlchemy implementation of the note repository.

This module contains the concrete implementation of the NoteRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from domain.entities.note import Note
from domain.entities.pull_request import PullRequestRef
from domain.entities.search import NoteSearchCriteria
from domain.exceptions import NoteNotFoundError
from domain.repositories.note_repository import NoteRepository
from infrastructure.models.associations import note_pr_links
from infrastructure.models.note_orm import NoteORM
from infrastructure.models.pull_request_orm import PullRequestORM
from infrastructure.repositories.sqlalchemy_pull_request_repository import (
    pull_request_orm_to_entity,
)
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyNoteRepository(NoteRepository):
    """SQLAlchemy implementation of the note repository.

    This class provides concrete implementation for note operations
    using SQLAlchemy ORM.

    NOTE: This repository does not store the session internally and never
    commits. Each method receives the request session; the domain service
    decides when the unit of work is committed or rolled back.
    """

    async def create_note(self, db_session: Session, note: Note) -> Note:
        """Create a new note in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            note (Note): Domain Note entity to create

        Returns:
            Note: Created note as stored
        """
        try:
            ref = note.pull_request_ref
            db_note = NoteORM(
                id=note.id,
                title=note.title,
                content=note.content,
                owner_id=note.owner_id,
                repo_owner=ref.repo_owner if ref else None,
                repo_name=ref.repo_name if ref else None,
                github_pr_number=ref.number if ref else None,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )

            db_session.add(db_note)
            db_session.flush()

            return self._orm_to_domain_entity(db_note)

        except Exception as e:
            logger.error(f"Failed to create note: {str(e)}")
            raise

    async def get_note_by_id(
        self, db_session: Session, note_id: UUID, user_id: str
    ) -> Optional[Note]:
        """Get a note by ID if it is owned by the user.

        Args:
            db_session (Session): Database session.
            note_id (UUID): The ID of the note to retrieve.
            user_id (str): The ID of the user requesting the note.

        Returns:
            Optional[Note]: The note if found and owned by the user, None otherwise.
        """
        try:
            note_orm = self._find_owned(db_session, note_id, user_id)

            if not note_orm:
                logger.info(f"Note {note_id} not found for user {user_id}")
                return None

            return self._orm_to_domain_entity(note_orm)

        except Exception as e:
            logger.error(f"Failed to get note {note_id}: {str(e)}")
            raise

    async def update_note(self, db_session: Session, note: Note) -> Note:
        """Update the scalar fields of an existing note.

        Args:
            db_session (Session): Database session.
            note (Note): The note entity with updated data.

        Returns:
            Note: The updated note entity.

        Raises:
            NoteNotFoundError: If the note is not found for its owner.
        """
        try:
            db_note = self._find_owned(db_session, note.id, note.owner_id)

            if not db_note:
                logger.warning(f"Note {note.id} not found for owner {note.owner_id}")
                raise NoteNotFoundError(f"Note {note.id} not found")

            ref = note.pull_request_ref
            db_note.title = note.title
            db_note.content = note.content
            db_note.repo_owner = ref.repo_owner if ref else None
            db_note.repo_name = ref.repo_name if ref else None
            db_note.github_pr_number = ref.number if ref else None
            db_note.updated_at = datetime.utcnow()

            db_session.flush()

            return self._orm_to_domain_entity(db_note)

        except NoteNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to update note {note.id}: {str(e)}")
            raise

    async def delete_note(
        self, db_session: Session, note_id: UUID, user_id: str
    ) -> bool:
        """Delete a note and its link rows.

        Args:
            db_session (Session): Database session.
            note_id (UUID): The ID of the note to delete.
            user_id (str): The ID of the user who owns the note.

        Returns:
            bool: True if the note was deleted, False if not found.
        """
        try:
            db_note = self._find_owned(db_session, note_id, user_id)

            if not db_note:
                return False

            db_session.delete(db_note)
            db_session.flush()

            return True

        except Exception as e:
            logger.error(f"Failed to delete note {note_id}: {str(e)}")
            raise

    async def list_notes(
        self, db_session: Session, criteria: NoteSearchCriteria
    ) -> Tuple[List[Note], int]:
        """Get a filtered, paginated list of a user's notes.

        Args:
            db_session (Session): Database session.
            criteria (NoteSearchCriteria): Owner, filters and pagination.

        Returns:
            Tuple[List[Note], int]: A tuple containing the list of notes and total count.
        """
        try:
            base_query = db_session.query(NoteORM).filter(
                NoteORM.owner_id == criteria.user_id
            )

            if criteria.has_text_search():
                pattern = f"%{criteria.query}%"
                base_query = base_query.filter(
                    or_(NoteORM.title.ilike(pattern), NoteORM.content.ilike(pattern))
                )

            if criteria.has_pr_number_filter():
                base_query = base_query.filter(
                    NoteORM.github_pr_number == criteria.pr_number
                )

            if criteria.has_pr_state_filter():
                # Notes with at least one linked PR in the requested state
                linked_note_ids = (
                    select(note_pr_links.c.note_id)
                    .join(
                        PullRequestORM,
                        PullRequestORM.id == note_pr_links.c.pull_request_id,
                    )
                    .where(PullRequestORM.state == criteria.pr_state)
                )
                base_query = base_query.filter(NoteORM.id.in_(linked_note_ids))

            total_count = base_query.count()

            notes_orm = (
                base_query.order_by(NoteORM.created_at.desc(), NoteORM.id)
                .offset(criteria.offset)
                .limit(criteria.limit)
                .all()
            )

            notes = [self._orm_to_domain_entity(note_orm) for note_orm in notes_orm]

            return notes, total_count

        except Exception as e:
            logger.error(f"Failed to list notes for {criteria.user_id}: {str(e)}")
            raise

    def _find_owned(
        self, db_session: Session, note_id: UUID, user_id: str
    ) -> Optional[NoteORM]:
        return (
            db_session.query(NoteORM)
            .filter(NoteORM.id == note_id, NoteORM.owner_id == user_id)
            .first()
        )

    def _orm_to_domain_entity(self, note_orm: NoteORM) -> Note:
        """Convert SQLAlchemy ORM object to domain entity."""
        pull_request_ref = None
        if note_orm.github_pr_number is not None:
            pull_request_ref = PullRequestRef(
                repo_owner=note_orm.repo_owner,
                repo_name=note_orm.repo_name,
                number=note_orm.github_pr_number,
            )

        return Note(
            id=note_orm.id,
            title=note_orm.title,
            content=note_orm.content,
            owner_id=note_orm.owner_id,
            created_at=note_orm.created_at,
            updated_at=note_orm.updated_at,
            pull_request_ref=pull_request_ref,
            pull_requests=[
                pull_request_orm_to_entity(pr_orm) for pr_orm in note_orm.pull_requests
            ],
        )
