"""User profile input schemas for API requests."""

from typing import Optional

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """Schema for updating the user's GitHub settings.

    Empty or missing values keep what is already stored.

    Attributes:
        github_username (str, optional): GitHub login.
        github_token (str, optional): GitHub personal access token.

    Example:
        >>> ProfileUpdate(github_username="alice", github_token="ghp_...")
    """

    github_username: Optional[str] = Field(default=None, max_length=255)
    github_token: Optional[str] = Field(default=None, max_length=512)
