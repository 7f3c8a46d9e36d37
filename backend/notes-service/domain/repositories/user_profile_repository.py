"""User profile repository interface for the GitHub notes application."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from domain.entities.user_profile import UserProfile
    from sqlalchemy.orm import Session


class UserProfileRepository(ABC):
    """Abstract repository interface for user profiles."""

    @abstractmethod
    async def get_by_user_id(
        self, db_session: Session, user_id: str
    ) -> Optional[UserProfile]:
        """Get the profile of a user.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            user_id (str): Identifier of the user

        Returns:
            Optional[UserProfile]: The stored profile, None if never saved
        """
        pass

    @abstractmethod
    async def save(self, db_session: Session, profile: UserProfile) -> UserProfile:
        """Insert or update a user profile.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            profile (UserProfile): Profile to store

        Returns:
            UserProfile: The stored profile
        """
        pass
