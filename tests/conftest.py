from datetime import datetime, timedelta, timezone

import pytest

from issue_recommender.schemas import Issue, UserProfile

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_issue():
    """Factory for issues; each call gets a distinct id unless one is given."""
    counter = {"n": 0}

    def _make(**overrides) -> Issue:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "id": f"issue-{n:03d}",
            "github_id": 1000 + n,
            "number": n,
            "title": f"Issue number {n}",
            "body": None,
            "labels": [],
            "repository_name": "repo",
            "repository_owner": "owner",
            "updated_at": NOW - timedelta(days=30),
        }
        data.update(overrides)
        return Issue(**data)

    return _make


@pytest.fixture
def make_user():
    def _make(**overrides) -> UserProfile:
        data = {
            "id": "user-1",
            "github_id": 42,
            "username": "octocat",
            "top_languages": [],
        }
        data.update(overrides)
        return UserProfile(**data)

    return _make
