"""Tests for PullRequestResolver against real SQLite storage and a fake GitHub."""

from datetime import datetime
from uuid import uuid4

import pytest

from domain.entities.pull_request import PullRequestRef
from domain.exceptions import (
    InvalidArgumentError,
    PullRequestNotFoundError,
    RateLimitedError,
    RemoteForbiddenError,
    RemoteUnauthorizedError,
    UpstreamError,
)
from infrastructure.models.pull_request_orm import PullRequestORM
from tests.fakes import GITHUB_TOKEN

REF = PullRequestRef("acme", "widgets", 42)


@pytest.mark.asyncio
async def test_resolving_twice_fetches_once(db_session, resolver, gateway):
    gateway.add("acme", "widgets", 42, title="Add widget", state="open", author="alice")

    first = await resolver.resolve(db_session, REF, GITHUB_TOKEN)
    second = await resolver.resolve(db_session, REF, GITHUB_TOKEN)

    assert gateway.fetch_count == 1
    assert first == second
    assert first.title == "Add widget"
    assert first.author == "alice"
    assert first.state == "open"


@pytest.mark.asyncio
async def test_cached_record_is_returned_unchanged(db_session, resolver, gateway):
    gateway.add("acme", "widgets", 42, state="open")
    cached = await resolver.resolve(db_session, REF, GITHUB_TOKEN)
    db_session.commit()

    # GitHub moved on, the cache does not
    gateway.add("acme", "widgets", 42, state="closed")
    again = await resolver.resolve(db_session, REF, GITHUB_TOKEN)

    assert again.state == "open"
    assert again.id == cached.id
    assert gateway.fetch_count == 1


@pytest.mark.asyncio
async def test_token_is_sent_trimmed(db_session, resolver, gateway):
    gateway.add("acme", "widgets", 42)

    await resolver.resolve(db_session, REF, f"  {GITHUB_TOKEN}\n")

    assert gateway.calls == [("acme", "widgets", 42, GITHUB_TOKEN)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "ref,token",
    [
        (PullRequestRef("", "widgets", 1), GITHUB_TOKEN),
        (PullRequestRef("acme", " ", 1), GITHUB_TOKEN),
        (PullRequestRef("acme", "widgets", 0), GITHUB_TOKEN),
        (PullRequestRef("acme", "widgets", -3), GITHUB_TOKEN),
        (PullRequestRef("acme", "widgets", True), GITHUB_TOKEN),
        (REF, ""),
        (REF, "   "),
    ],
)
async def test_invalid_input_fails_before_any_io(db_session, resolver, gateway, ref, token):
    gateway.add("acme", "widgets", 42)

    with pytest.raises(InvalidArgumentError):
        await resolver.resolve(db_session, ref, token)

    assert gateway.fetch_count == 0


@pytest.mark.asyncio
async def test_unknown_pull_request(db_session, resolver):
    with pytest.raises(PullRequestNotFoundError) as exc_info:
        await resolver.resolve(db_session, REF, GITHUB_TOKEN)

    assert str(exc_info.value) == "PR 42 not found in acme/widgets"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        RemoteUnauthorizedError("bad credentials", status_code=401),
        RemoteForbiddenError("Resource not accessible", status_code=403),
        RateLimitedError("rate limited", status_code=429, retry_after=30),
        UpstreamError("GitHub API error 500", status_code=500),
    ],
)
async def test_remote_errors_propagate_unchanged(db_session, resolver, gateway, error):
    gateway.error = error

    with pytest.raises(type(error)) as exc_info:
        await resolver.resolve(db_session, REF, GITHUB_TOKEN)

    assert exc_info.value is error
    assert db_session.query(PullRequestORM).count() == 0


@pytest.mark.asyncio
async def test_concurrent_insert_returns_existing_row(db_session, resolver, gateway):
    gateway.add("acme", "widgets", 42, title="Add widget")
    racing_id = uuid4()

    def insert_same_pull_request(repo_owner, repo_name, number):
        # Another request stores the same PR while this one waits on GitHub
        now = datetime.utcnow()
        db_session.add(
            PullRequestORM(
                id=racing_id,
                repo_owner=repo_owner,
                repo_name=repo_name,
                number=number,
                title="Add widget",
                body="",
                author="alice",
                state="open",
                url="https://github.com/acme/widgets/pull/42",
                created_at=now,
                updated_at=now,
            )
        )
        db_session.flush()

    gateway.on_fetch = insert_same_pull_request

    resolved = await resolver.resolve(db_session, REF, GITHUB_TOKEN)

    assert resolved.id == racing_id
    db_session.commit()
    assert db_session.query(PullRequestORM).count() == 1
