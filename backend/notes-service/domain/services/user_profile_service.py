"""User profile domain service for the GitHub notes application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from domain.entities.user_profile import UserProfile
from domain.exceptions import DomainError, NoteError

if TYPE_CHECKING:
    from domain.repositories.user_profile_repository import UserProfileRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class UserProfileService:
    """Domain service for reading and updating a user's GitHub settings."""

    def __init__(self, user_profile_repository: "UserProfileRepository"):
        self._user_profile_repository = user_profile_repository

    async def get_profile(self, db_session: "Session", user_id: str) -> UserProfile:
        """Get the profile of a user.

        Args:
            db_session: Database session for this operation
            user_id: Identifier of the user

        Returns:
            UserProfile: The stored profile, or an empty one when none exists
        """
        profile = await self._user_profile_repository.get_by_user_id(
            db_session, user_id
        )
        if profile is None:
            logger.info(f"No profile stored for user {user_id}")
            return UserProfile.empty(user_id)
        return profile

    async def update_profile(
        self,
        db_session: "Session",
        user_id: str,
        github_username: Optional[str] = None,
        github_token: Optional[str] = None,
    ) -> UserProfile:
        """Update the GitHub settings of a user, creating the profile if needed.

        Only non-empty values overwrite the stored ones.

        Args:
            db_session: Database session for this operation
            user_id: Identifier of the user
            github_username: New GitHub login
            github_token: New GitHub personal access token

        Returns:
            UserProfile: The stored profile

        Raises:
            NoteError: If the profile cannot be stored
        """
        logger.info(f"Updating profile for user {user_id}")

        try:
            profile = await self.get_profile(db_session, user_id)
            if not profile.is_persisted():
                logger.info(f"Creating profile for user {user_id}")
            profile.update_github_settings(github_username, github_token)
            saved = await self._user_profile_repository.save(db_session, profile)
            db_session.commit()
        except DomainError:
            db_session.rollback()
            raise
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update profile for user {user_id}: {str(e)}")
            raise NoteError(f"Failed to update profile: {str(e)}") from e

        logger.info(
            f"Profile for user {user_id} updated "
            f"(github token configured: {saved.has_github_token()})"
        )
        return saved
