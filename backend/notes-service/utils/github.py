"""GitHub integration utilities for pull request lookup.

This module provides the HTTP implementation of the PullRequestGateway,
fetching pull requests from the GitHub REST API with the acting user's
personal access token.

Architecture:
    GitHub integration is separated from other dependencies to follow
    single responsibility principle and make testing easier: tests pass an
    ``httpx.MockTransport`` instead of reaching the network.
"""

import logging
from typing import Optional

import httpx

from domain.entities.pull_request import PullRequestData
from domain.exceptions import (
    PullRequestNotFoundError,
    RateLimitedError,
    RemoteForbiddenError,
    RemoteUnauthorizedError,
    UpstreamError,
)
from domain.gateways.pull_request_gateway import PullRequestGateway

from .config import (
    GITHUB_API_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    GITHUB_USER_AGENT,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract the ``message`` field of a GitHub error payload, if any."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return None


def _int_header(response: httpx.Response, name: str) -> Optional[int]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class GitHubPullRequestGateway(PullRequestGateway):
    """Fetch pull requests from the GitHub REST API v3.

    Args:
        api_url (str): Base URL of the GitHub API.
        timeout (float): Request timeout in seconds.
        api_version (str): Value of the ``X-GitHub-Api-Version`` header.
        user_agent (str): Value of the ``User-Agent`` header.
        transport (Optional[httpx.AsyncBaseTransport]): Transport override, used by tests.

    Example:
        >>> gateway = GitHubPullRequestGateway()
        >>> data = await gateway.fetch_pull_request("acme", "widgets", 42, token)
        >>> print(data.title)
        "Add widget"
    """

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_API_TIMEOUT,
        api_version: str = GITHUB_API_VERSION,
        user_agent: str = GITHUB_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._api_version = api_version
        self._user_agent = user_agent
        self._transport = transport

    def _headers(self, token: str) -> dict:
        return {
            "Authorization": f"Bearer {token.strip()}",
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": self._api_version,
            "User-Agent": self._user_agent,
        }

    async def fetch_pull_request(
        self, repo_owner: str, repo_name: str, number: int, token: str
    ) -> PullRequestData:
        """Fetch a pull request from GitHub.

        Args:
            repo_owner (str): Owner of the repository.
            repo_name (str): Name of the repository.
            number (int): Pull request number.
            token (str): GitHub personal access token of the acting user.

        Returns:
            PullRequestData: Fields of the pull request.

        Raises:
            PullRequestNotFoundError: On 404.
            RemoteUnauthorizedError: On 401.
            RemoteForbiddenError: On 403 without rate limit exhaustion.
            RateLimitedError: On 429, or 403 with ``X-RateLimit-Remaining: 0``.
            UpstreamError: On any other status, bad payload or transport failure.
        """
        url = f"{self._api_url}/repos/{repo_owner}/{repo_name}/pulls/{number}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=self._headers(token))
        except httpx.HTTPError as e:
            logger.error(f"GitHub request for {repo_owner}/{repo_name}#{number} failed: {e}")
            raise UpstreamError(f"GitHub request failed: {str(e)}") from e

        status = response.status_code
        if status == 200:
            try:
                return PullRequestData.from_github_payload(response.json())
            except (ValueError, KeyError, TypeError) as e:
                logger.error(f"Unexpected GitHub payload for {url}: {e}")
                raise UpstreamError(
                    "GitHub returned an invalid pull request payload", status_code=status
                ) from e

        message = _error_message(response)
        logger.warning(
            f"GitHub returned {status} for {repo_owner}/{repo_name}#{number}: {message}"
        )

        if status == 404:
            raise PullRequestNotFoundError(repo_owner, repo_name, number)

        if status == 401:
            raise RemoteUnauthorizedError(
                "GitHub rejected the configured token", status_code=status
            )

        if status == 403:
            if _int_header(response, "X-RateLimit-Remaining") == 0:
                raise RateLimitedError(
                    "GitHub API rate limit exceeded",
                    status_code=status,
                    retry_after=_int_header(response, "Retry-After"),
                )
            raise RemoteForbiddenError(
                message or f"Access to {repo_owner}/{repo_name} is forbidden",
                status_code=status,
            )

        if status == 429:
            raise RateLimitedError(
                "GitHub API rate limit exceeded",
                status_code=status,
                retry_after=_int_header(response, "Retry-After"),
            )

        raise UpstreamError(
            f"GitHub API error {status}" + (f": {message}" if message else ""),
            status_code=status,
        )
