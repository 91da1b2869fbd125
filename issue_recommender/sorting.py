"""Ordering of filtered issues."""

from typing import Callable, Mapping, Optional, Sequence

from issue_recommender.schemas import Issue, SortBy

SortKey = Callable[[Issue], tuple]


def _sort_key(sort_by: SortBy, scores: Optional[Mapping[str, int]]) -> SortKey:
    # Every key ends with the issue id so equal values keep a reproducible order.
    if sort_by == "stars":
        return lambda issue: (-issue.repository_stars, issue.id)
    if sort_by == "comments":
        return lambda issue: (-issue.comments, issue.id)
    if sort_by == "match":
        if scores is not None:
            return lambda issue: (-scores.get(issue.id, 0), issue.id)
        return lambda issue: (not issue.is_recommended, issue.id)
    return lambda issue: (-issue.updated_at.timestamp(), issue.id)


def sort_issues(
    issues: Sequence[Issue],
    sort_by: SortBy = "recent",
    scores: Optional[Mapping[str, int]] = None,
) -> list[Issue]:
    """
    Return a new list of issues in the requested order.

    All modes sort descending. ``match`` uses precomputed ``scores`` (keyed by
    issue id) when given, otherwise the issue's ``is_recommended`` flag.
    Unknown modes fall back to ``recent``.
    """
    return sorted(issues, key=_sort_key(sort_by, scores))
