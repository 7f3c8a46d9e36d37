"""User profile output schemas for API responses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.user_profile import UserProfile


class ProfileResponse(BaseModel):
    """Schema for the user's GitHub settings.

    The token itself is never returned; ``has_github_token`` tells whether
    one is configured.

    Attributes:
        user_id (str): Identifier of the user.
        github_username (str, optional): GitHub login.
        has_github_token (bool): Whether a GitHub token is stored.
        created_at (datetime, optional): When the profile was first stored.
        updated_at (datetime, optional): When the profile was last updated.
    """

    user_id: str
    github_username: Optional[str] = None
    has_github_token: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, profile: UserProfile) -> ProfileResponse:
        return cls(
            user_id=profile.user_id,
            github_username=profile.github_username,
            has_github_token=profile.has_github_token(),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
