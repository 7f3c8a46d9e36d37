"""Common test fixtures for the GitHub notes service."""

import os

# utils.dependencies builds its engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from domain.services.association_manager import AssociationManager
from domain.services.note_service import NoteService
from domain.services.pull_request_resolver import PullRequestResolver
from domain.services.user_profile_service import UserProfileService
from infrastructure.models import associations, note_orm, pull_request_orm  # noqa: F401
from infrastructure.models.base import Base
from infrastructure.models.user_profile_orm import UserProfileORM
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
from tests.fakes import GITHUB_TOKEN, USER_ID, FakePullRequestGateway


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs these for SAVEPOINT support
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway():
    return FakePullRequestGateway()


@pytest.fixture
def note_repository():
    return SQLAlchemyNoteRepository()


@pytest.fixture
def pull_request_repository():
    return SQLAlchemyPullRequestRepository()


@pytest.fixture
def association_repository():
    return SQLAlchemyNotePullRequestRepository()


@pytest.fixture
def user_profile_repository():
    return SQLAlchemyUserProfileRepository()


@pytest.fixture
def resolver(pull_request_repository, gateway):
    return PullRequestResolver(pull_request_repository, gateway)


@pytest.fixture
def association_manager(association_repository, user_profile_repository, resolver):
    return AssociationManager(association_repository, user_profile_repository, resolver)


@pytest.fixture
def note_service(note_repository, association_manager):
    return NoteService(note_repository, association_manager)


@pytest.fixture
def user_profile_service(user_profile_repository):
    return UserProfileService(user_profile_repository)


@pytest.fixture
def github_user(db_session):
    """USER_ID with a GitHub token configured in their profile."""
    db_session.add(
        UserProfileORM(
            user_id=USER_ID, github_username="alice", github_token=GITHUB_TOKEN
        )
    )
    db_session.commit()
    return USER_ID
