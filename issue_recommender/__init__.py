"""Open source issue recommender: filtering, scoring and ranking of cached GitHub issues."""

from .engine import compute_stats, query_issues, query_recommended
from .schemas import Filters, Issue, QueryResult, UserProfile
from .store import IssueStore

__all__ = [
    "Filters",
    "Issue",
    "IssueStore",
    "QueryResult",
    "UserProfile",
    "compute_stats",
    "query_issues",
    "query_recommended",
]
