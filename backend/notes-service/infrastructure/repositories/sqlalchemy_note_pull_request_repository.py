"""SQLAlchemy implementation of the note/pull request association repository."""

from __future__ import annotations

import logging
from typing import Iterable, Set
from uuid import UUID

from domain.exceptions import NoteNotFoundError, NotFoundError
from domain.repositories.note_pull_request_repository import (
    NotePullRequestRepository,
)
from infrastructure.models.associations import note_pr_links
from infrastructure.models.note_orm import NoteORM
from infrastructure.models.pull_request_orm import PullRequestORM
from sqlalchemy import select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyNotePullRequestRepository(NotePullRequestRepository):
    """Maintains the ``note_pr_links`` rows through the NoteORM collection."""

    async def list_associations(self, db_session: Session, note_id: UUID) -> Set[UUID]:
        try:
            rows = db_session.execute(
                select(note_pr_links.c.pull_request_id).where(
                    note_pr_links.c.note_id == note_id
                )
            )
            return {row.pull_request_id for row in rows}

        except Exception as e:
            logger.error(f"Failed to list links of note {note_id}: {str(e)}")
            raise

    async def replace_associations(
        self, db_session: Session, note_id: UUID, pull_request_ids: Iterable[UUID]
    ) -> None:
        """Replace the whole association set of a note.

        Either every requested pull request is linked or nothing changes.

        Args:
            db_session (Session): Database session.
            note_id (UUID): Identifier of the note.
            pull_request_ids (Iterable[UUID]): New set of linked pull requests.

        Raises:
            NoteNotFoundError: If the note does not exist.
            NotFoundError: If a requested pull request is not stored.
        """
        wanted = set(pull_request_ids)

        try:
            db_note = db_session.query(NoteORM).filter(NoteORM.id == note_id).first()
            if not db_note:
                raise NoteNotFoundError(f"Note {note_id} not found")

            pr_orms = []
            if wanted:
                pr_orms = (
                    db_session.query(PullRequestORM)
                    .filter(PullRequestORM.id.in_(list(wanted)))
                    .all()
                )
                missing = wanted - {pr_orm.id for pr_orm in pr_orms}
                if missing:
                    raise NotFoundError(
                        f"Pull requests {sorted(map(str, missing))} not found"
                    )

            # Assigning the collection lets SQLAlchemy diff old and new link rows
            db_note.pull_requests = pr_orms
            db_session.flush()

            logger.info(f"Note {note_id} now linked to {len(pr_orms)} pull request(s)")

        except NotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to replace links of note {note_id}: {str(e)}")
            raise
