"""Tests for the GitHub sync pipeline."""

import pytest
from unittest.mock import Mock, AsyncMock
from github import GithubException

from issue_recommender.github_service import GitHubService
from issue_recommender.pipeline import DEFAULT_SYNC_QUERIES, sync_issues, sync_user
from issue_recommender.schemas import RawIssue, RawProfile
from issue_recommender.store import IssueStore


def make_raw_issue(github_id: int, title: str = "Fix bug") -> RawIssue:
    return RawIssue(
        github_id=github_id,
        number=github_id,
        title=title,
        labels=["good first issue"],
        language="Python",
        repository_name="repo",
        repository_owner="test",
    )


class TestSyncIssues:
    @pytest.mark.asyncio
    async def test_sync_issues_stores_results(self):
        """Test that fetched issues are written to the store."""
        store = IssueStore()
        mock_service = Mock(spec=GitHubService)
        mock_service.search_issues = AsyncMock(return_value=[make_raw_issue(1), make_raw_issue(2)])

        count = await sync_issues(store, mock_service)

        assert count == 2
        assert len(store) == 2
        mock_service.search_issues.assert_called_once_with(
            queries=list(DEFAULT_SYNC_QUERIES),
            per_query=20
        )

    @pytest.mark.asyncio
    async def test_sync_issues_updates_existing(self):
        """Test that resyncing an issue updates instead of duplicating."""
        store = IssueStore()
        original = store.upsert_issue(make_raw_issue(1, title="Old title"))
        mock_service = Mock(spec=GitHubService)
        mock_service.search_issues = AsyncMock(return_value=[make_raw_issue(1, title="New title")])

        count = await sync_issues(store, mock_service, queries=["label:bug"], per_query=5)

        assert count == 1
        assert len(store) == 1
        assert store.get_issue(original.id).title == "New title"
        mock_service.search_issues.assert_called_once_with(queries=["label:bug"], per_query=5)

    @pytest.mark.asyncio
    async def test_sync_issues_no_results(self):
        """Test a sync that finds nothing."""
        store = IssueStore()
        mock_service = Mock(spec=GitHubService)
        mock_service.search_issues = AsyncMock(return_value=[])

        assert await sync_issues(store, mock_service) == 0
        assert len(store) == 0


class TestSyncUser:
    @pytest.mark.asyncio
    async def test_sync_user(self):
        """Test that a fetched profile is stored."""
        store = IssueStore()
        mock_service = Mock(spec=GitHubService)
        mock_service.fetch_profile = AsyncMock(
            return_value=RawProfile(github_id=42, username="octocat", top_languages=["Go"])
        )

        user = await sync_user(store, mock_service, "octocat")

        assert store.get_user(user.id) == user
        assert user.top_languages == ("Go",)
        mock_service.fetch_profile.assert_called_once_with("octocat")

    @pytest.mark.asyncio
    async def test_sync_user_failure_propagates(self):
        """Test that GitHub errors reach the caller and nothing is stored."""
        store = IssueStore()
        mock_service = Mock(spec=GitHubService)
        mock_service.fetch_profile = AsyncMock(
            side_effect=GithubException(404, {"message": "Not Found"}, None)
        )

        with pytest.raises(GithubException):
            await sync_user(store, mock_service, "ghost")

        assert store.get_user_by_github_id(42) is None
