"""Boolean filters applied to single issues."""

from typing import AbstractSet, Sequence

from issue_recommender.schemas import Filters, Issue, RepositorySize, UserProfile
from issue_recommender.search import matches

SMALL_REPOSITORY_MAX_STARS = 100
LARGE_REPOSITORY_MIN_STARS = 1000


def language_ok(issue: Issue, languages: AbstractSet[str]) -> bool:
    if not languages:
        return True
    return issue.language is not None and issue.language in languages


def difficulty_ok(issue: Issue, difficulties: AbstractSet[str]) -> bool:
    if not difficulties:
        return True
    return issue.difficulty is not None and issue.difficulty in difficulties


def size_ok(issue: Issue, size: RepositorySize) -> bool:
    # Buckets are half-open: 100 stars is medium, 1000 is large.
    stars = issue.repository_stars
    if size == "small":
        return stars < SMALL_REPOSITORY_MAX_STARS
    if size == "medium":
        return SMALL_REPOSITORY_MAX_STARS <= stars < LARGE_REPOSITORY_MIN_STARS
    if size == "large":
        return stars >= LARGE_REPOSITORY_MIN_STARS
    return True


def search_ok(issue: Issue, term: str) -> bool:
    term = term.strip()
    if not term:
        return True
    return matches(issue, term)


def passes_filters(issue: Issue, filters: Filters) -> bool:
    """Return True if the issue satisfies every active filter."""
    return (
        language_ok(issue, filters.languages)
        and difficulty_ok(issue, filters.difficulty)
        and size_ok(issue, filters.repository_size)
        and search_ok(issue, filters.search)
    )


def apply_filters(issues: Sequence[Issue], filters: Filters) -> list[Issue]:
    return [issue for issue in issues if passes_filters(issue, filters)]


def has_language_affinity(issue: Issue, user: UserProfile) -> bool:
    """Keep issues without a language or in one of the user's top languages."""
    return issue.language is None or issue.language in user.top_languages


def narrow_to_user_languages(issues: Sequence[Issue], user: UserProfile) -> list[Issue]:
    """
    Restrict issues to those a user is likely able to work on.

    A user with no known languages gives nothing to narrow on, so every
    issue is kept in that case.
    """
    if not user.top_languages:
        return list(issues)
    return [issue for issue in issues if has_language_affinity(issue, user)]
