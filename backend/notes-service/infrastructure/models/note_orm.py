"""SQLAlchemy ORM model for Note entity.

This module contains the NoteORM class that defines the database schema
for notes and handles note data persistence.

Classes:
    NoteORM: SQLAlchemy model for notes with their pull request links.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyNoteRepository and SQLAlchemyNotePullRequestRepository
    - Other infrastructure-specific code

    Domain code should use the Note entity instead of this ORM model.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base


class NoteORM(Base):
    """SQLAlchemy ORM model for notes linked to GitHub pull requests.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        title (str): Note title, max 255 characters.
        content (str): Note content, unlimited text.
        owner_id (str): Identifier of the user who owns the note.
        repo_owner (str): Requested repository owner, if any.
        repo_name (str): Requested repository name, if any.
        github_pr_number (int): Requested pull request number, if any.
        created_at (datetime): Timestamp when note was created.
        updated_at (datetime): Timestamp when note was last updated.
        pull_requests (List[PullRequestORM]): Linked pull requests.

    Table Schema:
        - Table name: 'notes'
        - Primary key: id (UUID)
        - Indexes: owner_id, github_pr_number

    Relationships:
        - pull_requests: Many-to-many with PullRequestORM through note_pr_links

    Example:
        >>> note_orm = NoteORM(title="Review notes", content="", owner_id="user-1")
        >>> db.add(note_orm)
        >>> db.flush()
    """

    __tablename__ = "notes"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key, auto-generated UUID",
    )

    title = Column(
        String(255), nullable=False, comment="Note title, max 255 characters"
    )

    content = Column(
        Text, nullable=False, default="", comment="Note content, unlimited text"
    )

    owner_id = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Identifier of the user who owns the note",
    )

    # Pull request reference as sent by the user; links live in note_pr_links
    repo_owner = Column(String(255), nullable=True, comment="Requested repository owner")
    repo_name = Column(String(255), nullable=True, comment="Requested repository name")
    github_pr_number = Column(
        Integer, nullable=True, index=True, comment="Requested pull request number"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when note was created",
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="Timestamp when note was last updated",
    )

    pull_requests = relationship(
        "PullRequestORM",
        secondary="note_pr_links",
        back_populates="notes",
        lazy="select",
    )

    def __repr__(self) -> str:
        return (
            f"<NoteORM(id={self.id}, title='{self.title}', owner_id='{self.owner_id}')>"
        )

    def __str__(self) -> str:
        return self.title
