"""Pipeline for syncing GitHub data into the issue store."""

import logging
from typing import List, Sequence

from issue_recommender.github_service import GitHubService
from issue_recommender.schemas import RawIssue, UserProfile
from issue_recommender.store import IssueStore

logger = logging.getLogger(__name__)

DEFAULT_SYNC_QUERIES = (
    'label:"good first issue" state:open',
    'label:"beginner friendly" state:open',
    'label:"help wanted" state:open language:javascript',
    'label:"help wanted" state:open language:python',
    'label:"help wanted" state:open language:typescript',
    'label:"good first issue" state:open language:go',
)


async def sync_issues(
    store: IssueStore,
    svc: GitHubService,
    queries: Sequence[str] = DEFAULT_SYNC_QUERIES,
    per_query: int = 20,
) -> int:
    """
    Fetch beginner-friendly issues from GitHub and cache them in the store.

    Issues already known by GitHub id are updated in place.

    Args:
        store: Store receiving the issues
        svc: GitHubService instance for API calls
        queries: GitHub issue search queries
        per_query: Maximum issues fetched per query

    Returns:
        Number of issues written to the store
    """
    logger.info("Syncing issues for %d queries (up to %d each)", len(queries), per_query)

    raw_issues: List[RawIssue] = await svc.search_issues(queries=list(queries), per_query=per_query)
    for raw_issue in raw_issues:
        store.upsert_issue(raw_issue)

    logger.info("Synced %d issues, store now holds %d", len(raw_issues), len(store))
    return len(raw_issues)


async def sync_user(store: IssueStore, svc: GitHubService, username: str) -> UserProfile:
    """Fetch a GitHub user's profile and create or refresh it in the store."""
    raw_profile = await svc.fetch_profile(username)
    user = store.upsert_user(raw_profile)

    logger.info("Synced user %s (top languages: %s)", user.username, ", ".join(user.top_languages) or "none")
    return user
