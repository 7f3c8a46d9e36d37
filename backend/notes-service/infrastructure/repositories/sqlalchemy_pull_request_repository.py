"""SQLAlchemy implementation of the pull request repository."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from domain.entities.pull_request import PullRequestEntity, PullRequestRef
from domain.exceptions import DuplicatePullRequestError
from domain.repositories.pull_request_repository import PullRequestRepository
from infrastructure.models.pull_request_orm import PullRequestORM
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def pull_request_orm_to_entity(pr_orm: PullRequestORM) -> PullRequestEntity:
    """Convert SQLAlchemy ORM object to domain entity."""
    return PullRequestEntity(
        id=pr_orm.id,
        repo_owner=pr_orm.repo_owner,
        repo_name=pr_orm.repo_name,
        number=pr_orm.number,
        title=pr_orm.title,
        body=pr_orm.body,
        author=pr_orm.author,
        state=pr_orm.state,
        url=pr_orm.url,
        created_at=pr_orm.created_at,
        updated_at=pr_orm.updated_at,
    )


class SQLAlchemyPullRequestRepository(PullRequestRepository):
    """SQLAlchemy implementation of the pull request cache.

    The natural key is protected by the ``uq_pull_requests_natural_key``
    unique constraint. Inserts run inside a SAVEPOINT so that a conflict
    only discards the failed insert, not the caller's transaction.
    """

    async def get_by_id(
        self, db_session: Session, pull_request_id: UUID
    ) -> Optional[PullRequestEntity]:
        try:
            pr_orm = (
                db_session.query(PullRequestORM)
                .filter(PullRequestORM.id == pull_request_id)
                .first()
            )
            return pull_request_orm_to_entity(pr_orm) if pr_orm else None

        except Exception as e:
            logger.error(f"Failed to get pull request {pull_request_id}: {str(e)}")
            raise

    async def get_by_natural_key(
        self, db_session: Session, ref: PullRequestRef
    ) -> Optional[PullRequestEntity]:
        """Get a pull request record by owner, repository and number.

        Args:
            db_session (Session): Database session.
            ref (PullRequestRef): Natural key of the pull request.

        Returns:
            Optional[PullRequestEntity]: The cached record, None otherwise.
        """
        repo_owner, repo_name, number = ref.natural_key
        try:
            pr_orm = (
                db_session.query(PullRequestORM)
                .filter(
                    PullRequestORM.repo_owner == repo_owner,
                    PullRequestORM.repo_name == repo_name,
                    PullRequestORM.number == number,
                )
                .first()
            )
            return pull_request_orm_to_entity(pr_orm) if pr_orm else None

        except Exception as e:
            logger.error(f"Failed to look up pull request {ref}: {str(e)}")
            raise

    async def create(
        self, db_session: Session, pull_request: PullRequestEntity
    ) -> PullRequestEntity:
        """Insert a new pull request record.

        Args:
            db_session (Session): Database session.
            pull_request (PullRequestEntity): Record to store.

        Returns:
            PullRequestEntity: The stored record.

        Raises:
            DuplicatePullRequestError: If the natural key is already stored.
        """
        pr_orm = PullRequestORM(
            id=pull_request.id,
            repo_owner=pull_request.repo_owner,
            repo_name=pull_request.repo_name,
            number=pull_request.number,
            title=pull_request.title,
            body=pull_request.body,
            author=pull_request.author,
            state=pull_request.state,
            url=pull_request.url,
            created_at=pull_request.created_at,
            updated_at=pull_request.updated_at,
        )

        try:
            with db_session.begin_nested():
                db_session.add(pr_orm)
        except IntegrityError as e:
            logger.info(
                f"Pull request {pull_request.ref} already stored: {str(e.orig)}"
            )
            raise DuplicatePullRequestError(
                f"Pull request {pull_request.ref} already exists"
            ) from e

        return pull_request_orm_to_entity(pr_orm)
