"""Fake collaborators for testing.

FakePullRequestGateway stands in for the GitHub API. It serves pull
requests registered by the test, records every fetch so tests can count
remote calls, and can be told to raise a specific remote error.

Storage is never faked: tests run against real in-memory SQLite.
"""

from typing import Callable, Dict, List, Optional, Tuple

from domain.entities.pull_request import PullRequestData
from domain.exceptions import PullRequestNotFoundError
from domain.gateways.pull_request_gateway import PullRequestGateway

Key = Tuple[str, str, int]

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
GITHUB_TOKEN = "ghp_test_token"


class FakePullRequestGateway(PullRequestGateway):
    """Deterministic in-memory GitHub for testing."""

    def __init__(self) -> None:
        self.pull_requests: Dict[Key, PullRequestData] = {}
        self.calls: List[Tuple[str, str, int, str]] = []
        self.error: Optional[Exception] = None
        # Runs before the response is returned, used to simulate races
        self.on_fetch: Optional[Callable[[str, str, int], None]] = None

    @property
    def fetch_count(self) -> int:
        return len(self.calls)

    def add(
        self,
        repo_owner: str,
        repo_name: str,
        number: int,
        title: str = "Add widget",
        state: str = "open",
        author: str = "alice",
        body: str = "",
    ) -> PullRequestData:
        data = PullRequestData(
            number=number,
            title=title,
            body=body,
            author=author,
            state=state,
            url=f"https://github.com/{repo_owner}/{repo_name}/pull/{number}",
        )
        self.pull_requests[(repo_owner, repo_name, number)] = data
        return data

    async def fetch_pull_request(
        self, repo_owner: str, repo_name: str, number: int, token: str
    ) -> PullRequestData:
        self.calls.append((repo_owner, repo_name, number, token))

        if self.error is not None:
            raise self.error

        data = self.pull_requests.get((repo_owner, repo_name, number))
        if data is None:
            raise PullRequestNotFoundError(repo_owner, repo_name, number)

        if self.on_fetch is not None:
            self.on_fetch(repo_owner, repo_name, number)

        return data
