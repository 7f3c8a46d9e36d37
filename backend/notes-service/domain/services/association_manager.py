"""Association manager for the GitHub notes application.

This module contains the AssociationManager, which keeps a note's set of
linked pull requests in line with the reference sent by the user.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Set
from uuid import UUID

from domain.entities.pull_request import PullRequestEntity, PullRequestRef
from domain.exceptions import InvalidArgumentError, PreconditionFailedError

if TYPE_CHECKING:
    from domain.entities.note import Note
    from domain.repositories.note_pull_request_repository import (
        NotePullRequestRepository,
    )
    from domain.repositories.user_profile_repository import UserProfileRepository
    from domain.services.pull_request_resolver import PullRequestResolver
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class AssociationManager:
    """Domain service reconciling note/pull request associations.

    A note is linked to at most one pull request. Reconciling with a
    reference replaces the whole set; reconciling with None clears it.
    If anything fails before the replacement the existing links stay
    as they were.
    """

    def __init__(
        self,
        association_repository: "NotePullRequestRepository",
        user_profile_repository: "UserProfileRepository",
        resolver: "PullRequestResolver",
    ):
        self._association_repository = association_repository
        self._user_profile_repository = user_profile_repository
        self._resolver = resolver

    async def reconcile(
        self,
        db_session: "Session",
        note: "Note",
        desired_ref: Optional[PullRequestRef],
    ) -> Optional[PullRequestEntity]:
        """Make the note's associations match the desired reference.

        Args:
            db_session: Database session for this operation
            note: Note whose links are reconciled; its owner's token is used
            desired_ref: Pull request to link, or None to remove every link

        Returns:
            Optional[PullRequestEntity]: The linked pull request, None if cleared

        Raises:
            PreconditionFailedError: If the owner has no GitHub token configured
            InvalidArgumentError: If the reference is malformed
            PullRequestNotFoundError: If GitHub does not know the pull request
            RemoteServiceError: If GitHub rejects or fails the request
        """
        if desired_ref is None:
            logger.info(
                f"Clearing {len(note.pull_request_ids)} pull request link(s) "
                f"of note {note.id}"
            )
            await self._association_repository.replace_associations(
                db_session, note.id, set()
            )
            note.replace_pull_requests([])
            return None

        profile = await self._user_profile_repository.get_by_user_id(
            db_session, note.owner_id
        )
        if profile is None or not profile.has_github_token():
            raise PreconditionFailedError("remote credential required")

        if not isinstance(desired_ref.number, int) or desired_ref.number <= 0:
            raise InvalidArgumentError("github_pr_number must be positive")

        pull_request = await self._resolver.resolve(
            db_session, desired_ref, profile.github_token
        )

        await self._association_repository.replace_associations(
            db_session, note.id, {pull_request.id}
        )
        note.replace_pull_requests([pull_request])
        logger.info(f"Linked note {note.id} to pull request {desired_ref}")
        return pull_request

    async def list_associations(self, db_session: "Session", note_id: UUID) -> Set[UUID]:
        """Get the identifiers of the pull requests linked to a note."""
        return await self._association_repository.list_associations(db_session, note_id)
