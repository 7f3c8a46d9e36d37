"""User profile domain entity.

The profile holds the GitHub credential a user configures so the service
can fetch pull requests on their behalf.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class UserProfile:
    """Domain entity representing a user's GitHub settings.

    Attributes:
        user_id (str): Identifier of the authenticated user.
        github_username (Optional[str]): GitHub login of the user.
        github_token (Optional[str]): Personal access token used for GitHub calls.
        created_at (Optional[datetime]): When the profile was first stored.
        updated_at (Optional[datetime]): When the profile was last updated.
    """

    user_id: str
    github_username: Optional[str] = None
    github_token: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def empty(cls, user_id: str) -> "UserProfile":
        """Profile for a user who has not configured anything yet."""
        return cls(user_id=user_id)

    def is_persisted(self) -> bool:
        return self.created_at is not None

    def has_github_token(self) -> bool:
        return bool(self.github_token and self.github_token.strip())

    def update_github_settings(
        self, github_username: Optional[str], github_token: Optional[str]
    ) -> None:
        """Update the GitHub settings, ignoring blank values.

        Args:
            github_username (Optional[str]): New GitHub login, kept when blank.
            github_token (Optional[str]): New token, kept when blank.
        """
        now = datetime.utcnow()
        if github_username and github_username.strip():
            self.github_username = github_username.strip()
        if github_token and github_token.strip():
            self.github_token = github_token.strip()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
