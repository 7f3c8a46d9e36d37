"""Pull request domain entities.

This module contains the value objects and the entity that describe a
GitHub pull request inside the notes domain:

- PullRequestRef: the (owner, repo, number) triple a note request refers to.
- PullRequestData: the fields mirrored from the GitHub API.
- PullRequestEntity: the locally cached pull request record.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from uuid import UUID, uuid4

from domain.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class PullRequestRef:
    """Reference to a pull request by its natural key.

    Attributes:
        repo_owner (str): Owner of the repository (user or organization).
        repo_name (str): Name of the repository.
        number (int): Pull request number.

    Example:
        >>> ref = PullRequestRef(repo_owner="acme", repo_name="widgets", number=42)
        >>> ref.natural_key
        ('acme', 'widgets', 42)
    """

    repo_owner: str
    repo_name: str
    number: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "repo_owner", (self.repo_owner or "").strip())
        object.__setattr__(self, "repo_name", (self.repo_name or "").strip())

    @property
    def natural_key(self) -> Tuple[str, str, int]:
        return (self.repo_owner, self.repo_name, self.number)

    def __str__(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}#{self.number}"

    @classmethod
    def from_parts(
        cls,
        repo_owner: Optional[str],
        repo_name: Optional[str],
        number: Optional[int],
    ) -> Optional["PullRequestRef"]:
        """Build a reference from the optional request fields.

        The three fields travel together: either all of them are provided
        or none of them is.

        Args:
            repo_owner (Optional[str]): Repository owner from the request.
            repo_name (Optional[str]): Repository name from the request.
            number (Optional[int]): Pull request number from the request.

        Returns:
            Optional[PullRequestRef]: The reference, or None when all fields are absent.

        Raises:
            InvalidArgumentError: If only some of the fields are provided.
        """
        owner = (repo_owner or "").strip()
        name = (repo_name or "").strip()
        provided = [bool(owner), bool(name), number is not None]

        if not any(provided):
            return None
        if not all(provided):
            raise InvalidArgumentError(
                "repo_owner, repo_name and github_pr_number must be provided together"
            )
        return cls(repo_owner=owner, repo_name=name, number=number)


@dataclass(frozen=True)
class PullRequestData:
    """Pull request fields as returned by the GitHub API.

    Attributes:
        number (int): Pull request number.
        title (str): Pull request title.
        body (str): Pull request description, empty when GitHub has none.
        author (str): Login of the user who opened the pull request.
        state (str): Lifecycle state reported by GitHub ("open" or "closed").
        url (str): Canonical HTML URL of the pull request.
    """

    number: int
    title: str
    body: str
    author: str
    state: str
    url: str

    @classmethod
    def from_github_payload(cls, payload: Dict[str, Any]) -> "PullRequestData":
        """Create PullRequestData from a GitHub ``pulls/{number}`` response.

        Args:
            payload: Decoded JSON body of the GitHub response.

        Returns:
            PullRequestData: The mirrored pull request fields.

        Raises:
            KeyError: If a required field is missing from the payload.
            TypeError: If the payload does not have the expected shape.
        """
        return cls(
            number=int(payload["number"]),
            title=payload["title"],
            body=payload.get("body") or "",
            author=payload["user"]["login"],
            state=payload["state"],
            url=payload["html_url"],
        )


@dataclass(frozen=True)
class PullRequestEntity:
    """Domain entity representing a cached GitHub pull request.

    Records are immutable once fetched: at most one record exists per
    natural key and the core never updates one in place.

    Attributes:
        id (UUID): Unique identifier of the record.
        repo_owner (str): Repository owner, part of the natural key.
        repo_name (str): Repository name, part of the natural key.
        number (int): Pull request number, part of the natural key.
        title (str): Title mirrored from GitHub.
        body (str): Description mirrored from GitHub.
        author (str): Author login mirrored from GitHub.
        state (str): Lifecycle state mirrored from GitHub.
        url (str): Canonical URL mirrored from GitHub.
        created_at (datetime): When the record was stored.
        updated_at (datetime): When the record was last written.
    """

    id: UUID
    repo_owner: str
    repo_name: str
    number: int
    title: str
    body: str
    author: str
    state: str
    url: str
    created_at: datetime
    updated_at: datetime

    @property
    def ref(self) -> PullRequestRef:
        return PullRequestRef(
            repo_owner=self.repo_owner, repo_name=self.repo_name, number=self.number
        )

    @classmethod
    def from_remote(
        cls, ref: PullRequestRef, data: PullRequestData
    ) -> "PullRequestEntity":
        """Factory method to create a new record from fetched GitHub data.

        The natural key comes from the reference that was resolved so the
        stored record always matches the lookup that produced it.

        Args:
            ref (PullRequestRef): The reference that was resolved.
            data (PullRequestData): Fields returned by GitHub.

        Returns:
            PullRequestEntity: New record with generated UUID and timestamps.
        """
        now = datetime.utcnow()
        return cls(
            id=uuid4(),
            repo_owner=ref.repo_owner,
            repo_name=ref.repo_name,
            number=ref.number,
            title=data.title,
            body=data.body,
            author=data.author,
            state=data.state,
            url=data.url,
            created_at=now,
            updated_at=now,
        )
