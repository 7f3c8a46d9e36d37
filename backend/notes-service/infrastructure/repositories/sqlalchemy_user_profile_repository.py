"""SQLAlchemy implementation of the user profile repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from domain.entities.user_profile import UserProfile
from domain.repositories.user_profile_repository import UserProfileRepository
from infrastructure.models.user_profile_orm import UserProfileORM
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyUserProfileRepository(UserProfileRepository):
    """SQLAlchemy implementation of the user profile repository."""

    async def get_by_user_id(
        self, db_session: Session, user_id: str
    ) -> Optional[UserProfile]:
        try:
            profile_orm = db_session.get(UserProfileORM, user_id)
            return self._orm_to_domain_entity(profile_orm) if profile_orm else None

        except Exception as e:
            logger.error(f"Failed to get profile of user {user_id}: {str(e)}")
            raise

    async def save(self, db_session: Session, profile: UserProfile) -> UserProfile:
        """Insert or update a user profile.

        Args:
            db_session (Session): Database session.
            profile (UserProfile): Profile to store.

        Returns:
            UserProfile: The stored profile.
        """
        try:
            profile_orm = db_session.get(UserProfileORM, profile.user_id)
            if profile_orm is None:
                profile_orm = UserProfileORM(
                    user_id=profile.user_id,
                    created_at=profile.created_at or datetime.utcnow(),
                )
                db_session.add(profile_orm)

            profile_orm.github_username = profile.github_username
            profile_orm.github_token = profile.github_token
            profile_orm.updated_at = profile.updated_at or datetime.utcnow()

            db_session.flush()

            return self._orm_to_domain_entity(profile_orm)

        except Exception as e:
            logger.error(f"Failed to save profile of user {profile.user_id}: {str(e)}")
            raise

    def _orm_to_domain_entity(self, profile_orm: UserProfileORM) -> UserProfile:
        return UserProfile(
            user_id=profile_orm.user_id,
            github_username=profile_orm.github_username,
            github_token=profile_orm.github_token,
            created_at=profile_orm.created_at,
            updated_at=profile_orm.updated_at,
        )
