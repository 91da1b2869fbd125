import asyncio
import logging
from collections import Counter
from typing import Dict, List, Optional

from github import Github, GithubException
from github.Issue import Issue
from github.Repository import Repository

from issue_recommender.schemas import RawIssue, RawProfile
from issue_recommender.scoring import determine_difficulty, has_beginner_label

logger = logging.getLogger(__name__)


class GitHubService:
    def __init__(
        self,
        token: Optional[str] = None,
        profile_repo_sample: int = 10,
        top_languages_limit: int = 5,
    ):
        """Initialize GitHub service; without a token requests are anonymous."""
        self.client = Github(token or None, per_page=50)
        self.profile_repo_sample = profile_repo_sample
        self.top_languages_limit = top_languages_limit

    async def fetch_profile(self, username: str) -> RawProfile:
        """
        Fetch a GitHub user and derive their most used languages.

        Args:
            username: GitHub login

        Returns:
            RawProfile with top_languages ordered most-used first

        Raises:
            GithubException: If the user cannot be fetched
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._fetch_profile_sync, username)

    def _fetch_profile_sync(self, username: str) -> RawProfile:
        github_user = self.client.get_user(username)

        languages = Counter()
        for index, repo in enumerate(github_user.get_repos(sort="updated")):
            if index >= self.profile_repo_sample:
                break
            if repo.language:
                languages[repo.language] += 1

        return RawProfile(
            github_id=github_user.id,
            username=github_user.login,
            avatar_url=github_user.avatar_url,
            name=github_user.name,
            bio=github_user.bio,
            public_repos=github_user.public_repos or 0,
            followers=github_user.followers or 0,
            following=github_user.following or 0,
            top_languages=[lang for lang, _ in languages.most_common(self.top_languages_limit)],
        )

    async def search_issues(self, queries: List[str], per_query: int) -> List[RawIssue]:
        """
        Search GitHub for issues and normalize them with repository details.

        Args:
            queries: GitHub issue search queries
            per_query: Maximum issues to collect per query

        Returns:
            List of RawIssue objects, without duplicates
        """
        loop = asyncio.get_running_loop()
        all_issues: List[RawIssue] = []
        seen_ids = set()
        repositories: Dict[str, Optional[Repository]] = {}

        for query in queries:
            github_issues = await loop.run_in_executor(
                None,
                self._search_issues_sync,
                query,
                per_query
            )

            for github_issue in github_issues:
                if github_issue.id in seen_ids:
                    continue
                seen_ids.add(github_issue.id)

                repo = await loop.run_in_executor(
                    None,
                    self._get_repository_sync,
                    github_issue,
                    repositories
                )
                if repo is None:
                    continue

                all_issues.append(self._convert_to_raw_issue(github_issue, repo))

        return all_issues

    def _search_issues_sync(self, query: str, limit: int) -> List[Issue]:
        """
        Synchronous GitHub search to be run in executor.

        A failing query is logged and yields whatever was collected.
        """
        issues = []

        try:
            search_result = self.client.search_issues(query=query, sort="updated")
            for issue in search_result:
                if len(issues) >= limit:
                    break
                issues.append(issue)
        except GithubException as e:
            logger.warning("Failed to fetch issues for query %r: %s", query, e)

        return issues

    def _get_repository_sync(
        self,
        github_issue: Issue,
        cache: Dict[str, Optional[Repository]]
    ) -> Optional[Repository]:
        """Load the issue's repository details once per repository."""
        # html_url looks like https://github.com/<owner>/<name>/issues/<number>
        owner, name = github_issue.html_url.split("/")[3:5]
        full_name = f"{owner}/{name}"
        if full_name in cache:
            return cache[full_name]

        try:
            repo = self.client.get_repo(full_name)
        except GithubException as e:
            logger.warning("Failed to fetch repo details for %s: %s", full_name, e)
            repo = None

        cache[full_name] = repo
        return repo

    def _convert_to_raw_issue(self, github_issue: Issue, repo: Repository) -> RawIssue:
        """
        Convert a PyGithub Issue and its Repository to a RawIssue.

        Args:
            github_issue: GitHub Issue object from PyGithub
            repo: The repository the issue belongs to

        Returns:
            RawIssue object
        """
        labels = [label.name for label in github_issue.labels]

        return RawIssue(
            github_id=github_issue.id,
            number=github_issue.number,
            title=github_issue.title,
            body=github_issue.body or "",  # Handle None body
            state=github_issue.state,
            labels=labels,
            language=repo.language,
            repository_name=repo.name,
            repository_owner=repo.owner.login,
            repository_stars=repo.stargazers_count or 0,
            repository_forks=repo.forks_count or 0,
            comments=github_issue.comments or 0,
            difficulty=determine_difficulty(labels),
            is_recommended=has_beginner_label(labels),
            created_at=github_issue.created_at,
            updated_at=github_issue.updated_at,
        )
