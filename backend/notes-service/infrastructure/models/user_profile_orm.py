"""SQLAlchemy ORM model for user profiles.

Classes:
    UserProfileORM: SQLAlchemy model storing each user's GitHub settings.
"""

from datetime import datetime

from infrastructure.models.base import Base
from sqlalchemy import Column, DateTime, String


class UserProfileORM(Base):
    """SQLAlchemy ORM model for user GitHub settings.

    Attributes:
        user_id (str): Primary key, the authenticated user identifier.
        github_username (str): GitHub login, optional.
        github_token (str): GitHub personal access token, optional.
        created_at (datetime): Timestamp when the profile was created.
        updated_at (datetime): Timestamp when the profile was last updated.
    """

    __tablename__ = "user_profiles"

    user_id = Column(
        String(255), primary_key=True, comment="Authenticated user identifier"
    )

    github_username = Column(String(255), nullable=True, comment="GitHub login")

    github_token = Column(
        String(512), nullable=True, comment="GitHub personal access token"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when the profile was created",
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="Timestamp when the profile was last updated",
    )

    def __repr__(self) -> str:
        # never include the token
        return (
            f"<UserProfileORM(user_id='{self.user_id}', "
            f"github_username='{self.github_username}')>"
        )
