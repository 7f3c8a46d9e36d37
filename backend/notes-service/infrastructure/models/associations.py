"""Association tables for many-to-many relationships in SQLAlchemy ORM.

Tables:
    note_pr_links: Associates notes with cached pull requests (many-to-many)

Architecture:
    These association tables are part of the Infrastructure layer and are used
    by SQLAlchemy to manage many-to-many relationships automatically. The
    composite primary key keeps each (note, pull request) pair unique.
"""

from infrastructure.models.base import Base
from sqlalchemy import Column, ForeignKey, Table, Uuid

note_pr_links = Table(
    "note_pr_links",
    Base.metadata,
    Column(
        "note_id",
        Uuid(as_uuid=True),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "pull_request_id",
        Uuid(as_uuid=True),
        ForeignKey("pull_requests.id"),
        primary_key=True,
        index=True,
    ),
    comment="Association table for many-to-many relationship between notes and pull requests",
)
