"""Pull request resolver for the GitHub notes application.

This module contains the PullRequestResolver, which turns a pull request
reference into a locally cached record, fetching it from GitHub on the
first request only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.entities.pull_request import PullRequestEntity, PullRequestRef
from domain.exceptions import DuplicatePullRequestError, InvalidArgumentError

if TYPE_CHECKING:
    from domain.gateways.pull_request_gateway import PullRequestGateway
    from domain.repositories.pull_request_repository import PullRequestRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def validate_pull_request_ref(ref: PullRequestRef) -> None:
    """Validate a pull request reference before any lookup.

    Args:
        ref: Reference to validate

    Raises:
        InvalidArgumentError: If owner or repository is empty, or the number
            is not a positive integer
    """
    if not ref.repo_owner:
        raise InvalidArgumentError("repo_owner is required")
    if not ref.repo_name:
        raise InvalidArgumentError("repo_name is required")
    if isinstance(ref.number, bool) or not isinstance(ref.number, int):
        raise InvalidArgumentError("github_pr_number must be an integer")
    if ref.number <= 0:
        raise InvalidArgumentError("github_pr_number must be positive")


class PullRequestResolver:
    """Domain service resolving pull request references.

    Cached records are returned as they are: once a pull request has been
    stored it is never fetched again. Concurrent first resolutions of the
    same reference converge on the single stored record.
    """

    def __init__(
        self,
        pull_request_repository: "PullRequestRepository",
        gateway: "PullRequestGateway",
    ):
        """Initialize the resolver with dependencies.

        Args:
            pull_request_repository: Repository for the pull request cache
            gateway: Client for the GitHub API
        """
        self._pull_request_repository = pull_request_repository
        self._gateway = gateway

    async def resolve(
        self, db_session: "Session", ref: PullRequestRef, token: str
    ) -> PullRequestEntity:
        """Return the stored record for a reference, fetching it if needed.

        Args:
            db_session: Database session for this operation
            ref: Owner, repository and number of the pull request
            token: GitHub credential used on a cache miss

        Returns:
            PullRequestEntity: The single stored record for the reference

        Raises:
            InvalidArgumentError: If the reference or token is malformed
            PullRequestNotFoundError: If GitHub does not know the pull request
            RemoteServiceError: If GitHub rejects or fails the request
        """
        validate_pull_request_ref(ref)
        if not token or not token.strip():
            raise InvalidArgumentError("token is required")

        cached = await self._pull_request_repository.get_by_natural_key(db_session, ref)
        if cached:
            logger.debug(f"Pull request {ref} served from cache")
            return cached

        logger.info(f"Fetching pull request {ref} from GitHub")
        data = await self._gateway.fetch_pull_request(
            ref.repo_owner, ref.repo_name, ref.number, token.strip()
        )

        pull_request = PullRequestEntity.from_remote(ref, data)
        try:
            stored = await self._pull_request_repository.create(db_session, pull_request)
        except DuplicatePullRequestError:
            logger.info(f"Pull request {ref} was stored concurrently, reusing it")
            stored = await self._pull_request_repository.get_by_natural_key(
                db_session, ref
            )
            if stored is None:
                raise

        logger.info(f"Cached pull request {ref} as {stored.id}")
        return stored
