"""Pull request output schemas for API responses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.pull_request import PullRequestEntity


class PullRequestResponse(BaseModel):
    """Schema for a cached GitHub pull request in API responses.

    Attributes:
        id (str): UUID string identifier of the record.
        repo_owner (str): Repository owner.
        repo_name (str): Repository name.
        number (int): Pull request number.
        title (str): Pull request title.
        body (str): Pull request description.
        author (str): Login of the author.
        state (str): Pull request state ("open" or "closed").
        url (str): Pull request HTML URL.
        created_at (datetime): When the record was stored.
        updated_at (datetime): When the record was last written.
    """

    id: str
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

    @classmethod
    def from_entity(cls, pull_request: PullRequestEntity) -> PullRequestResponse:
        return cls(
            id=str(pull_request.id),
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
