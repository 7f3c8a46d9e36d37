"""HTTP tests for the notes, profile and health routers."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from domain.exceptions import RateLimitedError
from main import app
from tests.fakes import GITHUB_TOKEN, OTHER_USER_ID, USER_ID
from utils.dependencies import get_db, get_pull_request_gateway

HEADERS = {"X-User-ID": USER_ID}


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_pull_request_gateway] = lambda: gateway
    # No context manager: tables come from the engine fixture, not the lifespan
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_note(client, headers=HEADERS, **fields):
    payload = {"title": "Review", "content": ""}
    payload.update(fields)
    return client.post("/notes", json=payload, headers=headers)


class TestNotesEndpoints:
    def test_user_header_is_required(self, client):
        assert client.get("/notes").status_code == 401
        assert client.post("/notes", json={"title": "t"}).status_code == 401
        assert client.get("/notes", headers={"X-User-ID": "  "}).status_code == 401

    def test_create_without_pull_request(self, client):
        response = create_note(client, title="Fix crash", content="null deref")

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Fix crash"
        assert body["owner_id"] == USER_ID
        assert body["github_pr_number"] is None
        assert body["pull_requests"] == []

    def test_create_with_pull_request(self, client, gateway, github_user):
        gateway.add("acme", "widgets", 42, title="Add widget", state="open")

        response = create_note(
            client, repo_owner="acme", repo_name="widgets", github_pr_number=42
        )

        assert response.status_code == 201
        body = response.json()
        assert body["repo_owner"] == "acme"
        assert body["github_pr_number"] == 42
        [pull_request] = body["pull_requests"]
        assert pull_request["title"] == "Add widget"
        assert pull_request["state"] == "open"
        assert pull_request["url"] == "https://github.com/acme/widgets/pull/42"

    def test_create_without_token(self, client, gateway):
        gateway.add("acme", "widgets", 42)

        response = create_note(
            client, repo_owner="acme", repo_name="widgets", github_pr_number=42
        )

        assert response.status_code == 400
        assert response.json() == {
            "detail": "remote credential required",
            "error_code": "PRECONDITION_FAILED",
        }
        assert client.get("/notes", headers=HEADERS).json()["notes"] == []

    def test_partial_pull_request_reference(self, client):
        response = create_note(client, repo_owner="acme", github_pr_number=42)

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"

    def test_blank_title(self, client):
        response = create_note(client, title="   ")

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"

    def test_title_too_long(self, client):
        assert create_note(client, title="t" * 256).status_code == 422

    def test_unknown_pull_request(self, client, github_user):
        response = create_note(
            client, repo_owner="acme", repo_name="widgets", github_pr_number=99
        )

        assert response.status_code == 404
        assert response.json() == {
            "detail": "PR 99 not found in acme/widgets",
            "error_code": "PULL_REQUEST_NOT_FOUND",
        }

    def test_rate_limited(self, client, gateway, github_user):
        gateway.error = RateLimitedError(
            "GitHub API rate limit exceeded", status_code=429, retry_after=30
        )

        response = create_note(
            client, repo_owner="acme", repo_name="widgets", github_pr_number=42
        )

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "30"
        assert response.json()["error_code"] == "GITHUB_RATE_LIMITED"

    def test_get_update_delete(self, client, gateway, github_user):
        gateway.add("o", "r", 5)
        gateway.add("o", "r", 7, state="closed")
        note_id = create_note(
            client, repo_owner="o", repo_name="r", github_pr_number=5
        ).json()["id"]

        fetched = client.get(f"/notes/{note_id}", headers=HEADERS)
        assert fetched.status_code == 200
        assert [pr["number"] for pr in fetched.json()["pull_requests"]] == [5]

        updated = client.put(
            f"/notes/{note_id}",
            json={
                "title": "Renamed",
                "content": "c",
                "repo_owner": "o",
                "repo_name": "r",
                "github_pr_number": 7,
            },
            headers=HEADERS,
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "Renamed"
        assert [pr["state"] for pr in updated.json()["pull_requests"]] == ["closed"]

        unlinked = client.put(
            f"/notes/{note_id}", json={"title": "Renamed"}, headers=HEADERS
        )
        assert unlinked.json()["pull_requests"] == []

        deleted = client.delete(f"/notes/{note_id}", headers=HEADERS)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Note deleted successfully"}
        assert client.get(f"/notes/{note_id}", headers=HEADERS).status_code == 404

    def test_delete_returns_only_the_message(self, client):
        note_id = create_note(client).json()["id"]

        response = client.delete(f"/notes/{note_id}", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"message": "Note deleted successfully"}

    def test_notes_of_other_users_are_invisible(self, client):
        note_id = create_note(client).json()["id"]
        other = {"X-User-ID": OTHER_USER_ID}

        assert client.get(f"/notes/{note_id}", headers=other).status_code == 404
        assert (
            client.put(f"/notes/{note_id}", json={"title": "x"}, headers=other).status_code
            == 404
        )
        assert client.delete(f"/notes/{note_id}", headers=other).status_code == 404
        assert client.get("/notes", headers=other).json()["notes"] == []

    def test_unknown_note(self, client):
        response = client.get(f"/notes/{uuid4()}", headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_list_filters_and_pagination(self, client, gateway, github_user):
        gateway.add("acme", "widgets", 1, state="open")
        gateway.add("acme", "widgets", 2, state="closed")
        create_note(
            client, title="open", repo_owner="acme", repo_name="widgets", github_pr_number=1
        )
        create_note(
            client,
            title="closed",
            repo_owner="acme",
            repo_name="widgets",
            github_pr_number=2,
        )
        create_note(client, title="plain", content="mentions a crash")

        by_state = client.get("/notes", params={"pr_state": "closed"}, headers=HEADERS)
        assert [n["title"] for n in by_state.json()["notes"]] == ["closed"]

        by_number = client.get("/notes", params={"pr_number": 1}, headers=HEADERS)
        assert [n["title"] for n in by_number.json()["notes"]] == ["open"]

        by_text = client.get("/notes", params={"search": "CRASH"}, headers=HEADERS)
        assert [n["title"] for n in by_text.json()["notes"]] == ["plain"]

        paged = client.get("/notes", params={"page": 2, "limit": 2}, headers=HEADERS)
        pagination = paged.json()["pagination"]
        assert len(paged.json()["notes"]) == 1
        assert pagination["total_notes"] == 3
        assert pagination["total_pages"] == 2
        assert pagination["has_previous"]
        assert not pagination["has_next"]

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    def test_invalid_pagination(self, client, params):
        assert client.get("/notes", params=params, headers=HEADERS).status_code == 422


class TestProfileEndpoints:
    def test_empty_profile(self, client):
        response = client.get("/user/profile", headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == USER_ID
        assert body["github_username"] is None
        assert body["has_github_token"] is False

    def test_token_is_never_returned(self, client):
        response = client.put(
            "/user/profile",
            json={"github_username": "alice", "github_token": GITHUB_TOKEN},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["has_github_token"] is True
        assert "github_token" not in response.json()
        assert GITHUB_TOKEN not in response.text

        fetched = client.get("/user/profile", headers=HEADERS).json()
        assert fetched["github_username"] == "alice"
        assert fetched["has_github_token"] is True

    def test_profile_token_enables_linking(self, client, gateway):
        gateway.add("acme", "widgets", 42)
        client.put("/user/profile", json={"github_token": GITHUB_TOKEN}, headers=HEADERS)

        response = create_note(
            client, repo_owner="acme", repo_name="widgets", github_pr_number=42
        )

        assert response.status_code == 201
        assert gateway.calls == [("acme", "widgets", 42, GITHUB_TOKEN)]


class TestHealthEndpoint:
    def test_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "github-notes-service",
            "database": "ok",
        }

    def test_database_unreachable(self, client, tmp_path):
        broken_engine = create_engine(f"sqlite:///{tmp_path}/missing/notes.db")
        broken_sessions = sessionmaker(bind=broken_engine)

        def broken_get_db():
            db = broken_sessions()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = broken_get_db

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
