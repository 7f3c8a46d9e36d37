"""Database and service dependencies for the Notes Service.

This module provides dependency injection functions for FastAPI,
including database session management, user identification and the
factories that wire domain services to their infrastructure.

Functions:
    - get_db: Database session factory with automatic cleanup
    - get_current_user_id: Extract user ID from request headers
    - get_pull_request_gateway: GitHub client used to resolve pull requests
    - get_note_service: Note lifecycle service
    - get_user_profile_service: User profile service

Architecture:
    These utilities are shared across all layers and provide clean dependency
    injection for database access and service construction. Routers only
    depend on the factories, so tests can swap them with
    ``app.dependency_overrides``.
"""

import logging
from typing import Generator

from domain.gateways.pull_request_gateway import PullRequestGateway
from domain.services.association_manager import AssociationManager
from domain.services.note_service import NoteService
from domain.services.pull_request_resolver import PullRequestResolver
from domain.services.user_profile_service import UserProfileService
from fastapi import Depends, HTTPException, Request
from infrastructure.repositories.sqlalchemy_note_pull_request_repository import (
    SQLAlchemyNotePullRequestRepository,
)
from infrastructure.repositories.sqlalchemy_note_repository import (
    SQLAlchemyNoteRepository,
)
from infrastructure.repositories.sqlalchemy_pull_request_repository import (
    SQLAlchemyPullRequestRepository,
)
from infrastructure.repositories.sqlalchemy_user_profile_repository import (
    SQLAlchemyUserProfileRepository,
)
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import DATABASE_URL, LOG_LEVEL
from .github import GitHubPullRequestGateway

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Database setup
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(request: Request) -> str:
    """Extract user ID from request headers.

    The API gateway in front of the service authenticates the caller and
    forwards the identifier.

    Args:
        request (Request): FastAPI request object containing headers.

    Returns:
        str: User ID extracted from X-User-ID header.

    Raises:
        HTTPException: 401 if X-User-ID header is missing.
    """
    user_id = request.headers.get("X-User-ID")
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="User ID not found in headers")
    return user_id.strip()


def get_pull_request_gateway() -> PullRequestGateway:
    """Create the GitHub client configured from the environment."""
    return GitHubPullRequestGateway()


def get_note_service(
    gateway: PullRequestGateway = Depends(get_pull_request_gateway),
) -> NoteService:
    """Create and configure the note service with its collaborators.

    The session is injected per-request in each endpoint method.

    Args:
        gateway: GitHub client used on pull request cache misses.

    Returns:
        NoteService: Configured domain service ready for use.
    """
    # Infrastructure layer: SQLAlchemy repositories (no session stored)
    note_repository = SQLAlchemyNoteRepository()
    pull_request_repository = SQLAlchemyPullRequestRepository()
    association_repository = SQLAlchemyNotePullRequestRepository()
    user_profile_repository = SQLAlchemyUserProfileRepository()

    # Domain layer: resolver -> association manager -> note lifecycle
    resolver = PullRequestResolver(pull_request_repository, gateway)
    association_manager = AssociationManager(
        association_repository, user_profile_repository, resolver
    )
    return NoteService(note_repository, association_manager)


def get_user_profile_service() -> UserProfileService:
    """Create and configure the user profile service."""
    return UserProfileService(SQLAlchemyUserProfileRepository())
