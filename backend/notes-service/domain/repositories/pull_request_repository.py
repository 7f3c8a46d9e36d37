"""Pull request repository interface for the GitHub notes application.

This module defines the repository interface for the local cache of
GitHub pull requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.pull_request import PullRequestEntity, PullRequestRef
    from sqlalchemy.orm import Session


class PullRequestRepository(ABC):
    """Abstract repository interface for cached pull request records.

    At most one record exists per (repo_owner, repo_name, number). The
    storage layer enforces this with a unique constraint.
    """

    @abstractmethod
    async def get_by_id(
        self, db_session: Session, pull_request_id: UUID
    ) -> Optional[PullRequestEntity]:
        """Get a pull request record by its identifier.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            pull_request_id (UUID): Identifier of the record

        Returns:
            Optional[PullRequestEntity]: The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_natural_key(
        self, db_session: Session, ref: PullRequestRef
    ) -> Optional[PullRequestEntity]:
        """Get a pull request record by owner, repository and number.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            ref (PullRequestRef): Natural key of the pull request

        Returns:
            Optional[PullRequestEntity]: The record if cached, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self, db_session: Session, pull_request: PullRequestEntity
    ) -> PullRequestEntity:
        """Insert a new pull request record.

        A failed insert must leave the surrounding transaction usable.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            pull_request (PullRequestEntity): Record to store

        Returns:
            PullRequestEntity: The stored record

        Raises:
            DuplicatePullRequestError: If a record with the same natural key exists
        """
        pass
