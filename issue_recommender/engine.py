"""Query engine: filter, personalize, score, sort and paginate issues."""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from issue_recommender.pagination import paginate
from issue_recommender.predicates import apply_filters, narrow_to_user_languages
from issue_recommender.schemas import Filters, Issue, IssueStats, LanguageCount, QueryResult, UserProfile
from issue_recommender.scoring import is_recent, is_recommended_for, score
from issue_recommender.sorting import sort_issues

logger = logging.getLogger(__name__)

UserLookup = Callable[[str], Optional[UserProfile]]

TOP_LANGUAGES_IN_STATS = 10


def query_issues(issues: Sequence[Issue], filters: Filters) -> QueryResult:
    """
    Filter, sort and paginate a snapshot of issues for an anonymous caller.

    Args:
        issues: Point-in-time snapshot of all known issues
        filters: Validated request filters

    Returns:
        QueryResult with the requested page and the filtered total
    """
    filtered = apply_filters(issues, filters)
    ordered = sort_issues(filtered, filters.sort_by)
    page = paginate(ordered, filters.page, filters.limit)

    logger.debug(
        "Anonymous query sort_by=%s page=%d: %d of %d issues matched",
        filters.sort_by, filters.page, len(filtered), len(issues),
    )
    return QueryResult(items=page, total=len(filtered))


def query_recommended(
    issues: Sequence[Issue],
    user_id: str,
    lookup: UserLookup,
    filters: Filters,
    now: Optional[datetime] = None,
) -> QueryResult:
    """
    Produce a personalized page of issues for a user.

    The user's top languages narrow the snapshot unless a search term is
    given, then the regular filters apply. Surviving issues are annotated
    with the user-specific ``is_recommended`` flag, and ``match`` sorting
    uses the additive recommendation score.

    Args:
        issues: Point-in-time snapshot of all known issues
        user_id: Identifier of the requesting user
        lookup: Resolves a user id to a profile, or None if unknown
        filters: Validated request filters
        now: Evaluation time for recency scoring

    Returns:
        QueryResult; empty when the user does not exist
    """
    user = lookup(user_id)
    if user is None:
        logger.info("Recommendations requested for unknown user %s", user_id)
        return QueryResult(items=[], total=0)

    now = now or datetime.now(timezone.utc)

    candidates = issues if filters.search else narrow_to_user_languages(issues, user)
    filtered = apply_filters(candidates, filters)
    annotated = [
        issue.model_copy(update={"is_recommended": is_recommended_for(issue, user)})
        for issue in filtered
    ]
    scores = {issue.id: score(issue, user, now) for issue in annotated}
    ordered = sort_issues(annotated, filters.sort_by, scores)
    page = paginate(ordered, filters.page, filters.limit)

    logger.debug(
        "Personalized query user=%s sort_by=%s page=%d: %d of %d issues matched",
        user_id, filters.sort_by, filters.page, len(filtered), len(issues),
    )
    return QueryResult(items=page, total=len(filtered))


def compute_stats(issues: Sequence[Issue], now: Optional[datetime] = None) -> IssueStats:
    """Summarize a snapshot: totals, recent activity, languages and difficulties."""
    now = now or datetime.now(timezone.utc)

    languages = Counter(issue.language for issue in issues if issue.language)
    difficulties = Counter(issue.difficulty for issue in issues if issue.difficulty)

    return IssueStats(
        total_issues=len(issues),
        recommended_issues=sum(1 for issue in issues if issue.is_recommended),
        new_issues=sum(1 for issue in issues if is_recent(issue, now)),
        top_languages=[
            LanguageCount(name=name, count=count)
            for name, count in languages.most_common(TOP_LANGUAGES_IN_STATS)
        ],
        difficulty_counts=dict(difficulties),
    )
