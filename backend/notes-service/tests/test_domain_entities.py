"""Tests for the domain entities and value objects."""

from datetime import datetime
from uuid import uuid4

import pytest

from domain.entities.note import TITLE_MAX_LENGTH, Note
from domain.entities.pull_request import (
    PullRequestData,
    PullRequestEntity,
    PullRequestRef,
)
from domain.entities.search import MAX_PAGE_SIZE, NoteSearchCriteria, PaginationMetadata
from domain.entities.user_profile import UserProfile
from domain.exceptions import InvalidArgumentError


class TestNote:
    def test_creation_keeps_title_and_content(self):
        note = Note.from_creation_request(
            title="Fix crash", content="null deref in parser", owner_id="user-1"
        )

        assert note.title == "Fix crash"
        assert note.content == "null deref in parser"
        assert note.owner_id == "user-1"
        assert note.pull_requests == []
        assert note.pull_request_ref is None
        assert note.created_at == note.updated_at

    def test_content_may_be_empty(self):
        note = Note.from_creation_request(title="Empty", content=None, owner_id="u")
        assert note.content == ""

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_is_rejected(self, title):
        with pytest.raises(InvalidArgumentError):
            Note.from_creation_request(title=title, content="x", owner_id="u")

    def test_title_length_limit(self):
        Note.from_creation_request(title="t" * TITLE_MAX_LENGTH, content="", owner_id="u")

        with pytest.raises(InvalidArgumentError):
            Note.from_creation_request(
                title="t" * (TITLE_MAX_LENGTH + 1), content="", owner_id="u"
            )

    def test_update_content_overwrites_reference(self):
        ref = PullRequestRef("acme", "widgets", 5)
        note = Note.from_creation_request(
            title="Old", content="old", owner_id="u", pull_request_ref=ref
        )

        note.update_content(title="New", content="new", pull_request_ref=None)

        assert note.title == "New"
        assert note.content == "new"
        assert note.pull_request_ref is None
        assert note.updated_at >= note.created_at

    def test_replace_pull_requests_drops_duplicates(self):
        note = Note.from_creation_request(title="t", content="", owner_id="u")
        pull_request = PullRequestEntity.from_remote(
            PullRequestRef("acme", "widgets", 5),
            PullRequestData(5, "Title", "", "alice", "open", "https://example"),
        )

        note.replace_pull_requests([pull_request, pull_request])

        assert note.pull_request_ids == {pull_request.id}


class TestPullRequestRef:
    def test_all_fields_absent_means_no_reference(self):
        assert PullRequestRef.from_parts(None, None, None) is None
        assert PullRequestRef.from_parts("", "  ", None) is None

    def test_fields_are_stripped(self):
        ref = PullRequestRef.from_parts(" acme ", "widgets ", 42)
        assert ref.natural_key == ("acme", "widgets", 42)
        assert str(ref) == "acme/widgets#42"

    @pytest.mark.parametrize(
        "owner,name,number",
        [("acme", None, None), ("acme", "widgets", None), (None, None, 42)],
    )
    def test_partial_reference_is_rejected(self, owner, name, number):
        with pytest.raises(InvalidArgumentError):
            PullRequestRef.from_parts(owner, name, number)

    def test_references_compare_by_value(self):
        assert PullRequestRef("acme", "widgets", 1) == PullRequestRef("acme", "widgets", 1)


class TestPullRequestData:
    def test_from_github_payload(self):
        payload = {
            "number": 42,
            "title": "Add widget",
            "body": None,
            "state": "open",
            "html_url": "https://github.com/acme/widgets/pull/42",
            "user": {"login": "alice"},
        }

        data = PullRequestData.from_github_payload(payload)

        assert data.number == 42
        assert data.title == "Add widget"
        assert data.body == ""
        assert data.author == "alice"
        assert data.state == "open"
        assert data.url == "https://github.com/acme/widgets/pull/42"

    def test_missing_field_raises(self):
        with pytest.raises(KeyError):
            PullRequestData.from_github_payload({"number": 1, "title": "x"})

    def test_entity_takes_natural_key_from_reference(self):
        ref = PullRequestRef("acme", "widgets", 42)
        data = PullRequestData(42, "Add widget", "body", "alice", "open", "https://x")

        entity = PullRequestEntity.from_remote(ref, data)

        assert entity.ref == ref
        assert entity.title == "Add widget"
        assert entity.id is not None


class TestSearchCriteria:
    def test_defaults(self):
        criteria = NoteSearchCriteria(user_id="u")
        assert criteria.page == 1
        assert criteria.limit == 10
        assert criteria.offset == 0

    def test_offset(self):
        assert NoteSearchCriteria(user_id="u", page=3, limit=20).offset == 40

    def test_blank_filters_are_ignored(self):
        criteria = NoteSearchCriteria(user_id="u", query="  ", pr_state="")
        assert not criteria.has_text_search()
        assert not criteria.has_pr_state_filter()

    @pytest.mark.parametrize(
        "page,limit", [(0, 10), (1, 0), (1, MAX_PAGE_SIZE + 1)]
    )
    def test_invalid_pagination(self, page, limit):
        with pytest.raises(InvalidArgumentError):
            NoteSearchCriteria(user_id="u", page=page, limit=limit)

    def test_pagination_metadata(self):
        pagination = PaginationMetadata.calculate(
            current_page=2, total_notes=25, notes_per_page=10
        )
        assert pagination.total_pages == 3
        assert pagination.has_next
        assert pagination.has_previous

    def test_pagination_metadata_without_results(self):
        pagination = PaginationMetadata.calculate(1, 0, 10)
        assert pagination.total_pages == 1
        assert not pagination.has_next
        assert not pagination.has_previous


class TestUserProfile:
    def test_blank_values_do_not_overwrite(self):
        profile = UserProfile(
            user_id="u",
            github_username="alice",
            github_token="ghp_old",
            created_at=datetime(2024, 1, 1),
        )

        profile.update_github_settings(github_username="", github_token="  ")

        assert profile.github_username == "alice"
        assert profile.github_token == "ghp_old"

    def test_token_is_trimmed(self):
        profile = UserProfile.empty("u")
        profile.update_github_settings(None, "  ghp_new \n")

        assert profile.github_token == "ghp_new"
        assert profile.has_github_token()
        assert profile.is_persisted()

    def test_empty_profile_has_no_token(self):
        profile = UserProfile.empty(str(uuid4()))
        assert not profile.has_github_token()
        assert not profile.is_persisted()
