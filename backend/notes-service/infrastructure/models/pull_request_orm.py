"""SQLAlchemy ORM model for cached GitHub pull requests.

Classes:
    PullRequestORM: SQLAlchemy model for pull request records fetched from GitHub.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by
    the SQLAlchemy repositories. Domain code uses PullRequestEntity.
"""

import uuid
from datetime import datetime

from infrastructure.models.base import Base
from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship


class PullRequestORM(Base):
    """SQLAlchemy ORM model for pull requests mirrored from GitHub.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        repo_owner (str): Repository owner, part of the natural key.
        repo_name (str): Repository name, part of the natural key.
        number (int): Pull request number, part of the natural key.
        title (str): Pull request title.
        body (str): Pull request description.
        author (str): Login of the pull request author.
        state (str): Lifecycle state ("open", "closed").
        url (str): Canonical HTML URL.
        created_at (datetime): Timestamp when the record was stored.
        updated_at (datetime): Timestamp when the record was last written.
        notes (List[NoteORM]): Notes linked to this pull request.

    Table Schema:
        - Table name: 'pull_requests'
        - Primary key: id (UUID)
        - Unique constraint: (repo_owner, repo_name, number)
        - Indexes: state
    """

    __tablename__ = "pull_requests"
    __table_args__ = (
        UniqueConstraint(
            "repo_owner", "repo_name", "number", name="uq_pull_requests_natural_key"
        ),
    )

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key, auto-generated UUID",
    )

    repo_owner = Column(String(255), nullable=False, comment="Repository owner")
    repo_name = Column(String(255), nullable=False, comment="Repository name")
    number = Column(Integer, nullable=False, comment="Pull request number")

    title = Column(String(1024), nullable=False, comment="Pull request title")
    body = Column(Text, nullable=False, default="", comment="Pull request description")
    author = Column(String(255), nullable=False, comment="Login of the author")
    state = Column(
        String(32), nullable=False, index=True, comment="Pull request state"
    )
    url = Column(String(1024), nullable=False, comment="Pull request HTML URL")

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when the record was stored",
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="Timestamp when the record was last written",
    )

    notes = relationship(
        "NoteORM",
        secondary="note_pr_links",
        back_populates="pull_requests",
        lazy="select",
    )

    def __repr__(self) -> str:
        return (
            f"<PullRequestORM(id={self.id}, "
            f"ref='{self.repo_owner}/{self.repo_name}#{self.number}', state='{self.state}')>"
        )

    def __str__(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}#{self.number}"
