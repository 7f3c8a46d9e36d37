"""Gateway interface for fetching pull requests from GitHub.

The domain depends on this abstraction only; the HTTP implementation
lives in ``utils.github``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.entities.pull_request import PullRequestData


class PullRequestGateway(ABC):
    """Abstract client for the remote pull request API."""

    @abstractmethod
    async def fetch_pull_request(
        self, repo_owner: str, repo_name: str, number: int, token: str
    ) -> PullRequestData:
        """Fetch a single pull request authenticated with the user's token.

        Args:
            repo_owner (str): Owner of the repository
            repo_name (str): Name of the repository
            number (int): Pull request number
            token (str): Bearer credential of the acting user

        Returns:
            PullRequestData: Fields of the pull request

        Raises:
            PullRequestNotFoundError: If the pull request does not exist
            RemoteUnauthorizedError: If the token is rejected
            RemoteForbiddenError: If access to the repository is denied
            RateLimitedError: If GitHub rate limits the caller
            UpstreamError: For any other failure
        """
        pass
