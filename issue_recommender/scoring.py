"""Recommendation scoring and label heuristics."""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from issue_recommender.schemas import Difficulty, Issue, UserProfile

BEGINNER_LABELS = frozenset({"good first issue", "beginner friendly", "help wanted"})

LANGUAGE_MATCH_POINTS = 10
BEGINNER_LABEL_POINTS = 15
POPULAR_REPOSITORY_POINTS = 5
RECENT_ACTIVITY_POINTS = 3

POPULAR_REPOSITORY_MIN_STARS = 100
RECENT_WINDOW = timedelta(days=7)


def has_beginner_label(labels: Iterable[str]) -> bool:
    return any(label.lower() in BEGINNER_LABELS for label in labels)


def speaks_language(issue: Issue, user: Optional[UserProfile]) -> bool:
    return user is not None and issue.language is not None and issue.language in user.top_languages


def is_recent(issue: Issue, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return issue.updated_at > now - RECENT_WINDOW


def score(issue: Issue, user: Optional[UserProfile] = None, now: Optional[datetime] = None) -> int:
    """
    Compute the additive recommendation score of an issue.

    Args:
        issue: Issue to score
        user: Optional profile; enables the language-match bonus
        now: Evaluation time, defaults to the current UTC time

    Returns:
        Non-negative integer score, independent of any other issue
    """
    total = 0
    if speaks_language(issue, user):
        total += LANGUAGE_MATCH_POINTS
    if has_beginner_label(issue.labels):
        total += BEGINNER_LABEL_POINTS
    if issue.repository_stars > POPULAR_REPOSITORY_MIN_STARS:
        total += POPULAR_REPOSITORY_POINTS
    if is_recent(issue, now):
        total += RECENT_ACTIVITY_POINTS
    return total


def is_recommended_for(issue: Issue, user: UserProfile) -> bool:
    """Recommendation flag shown to a user: known language or beginner label."""
    return speaks_language(issue, user) or has_beginner_label(issue.labels)


def determine_difficulty(labels: Iterable[str]) -> Difficulty:
    """
    Guess an issue's difficulty from its labels at ingestion time.

    Unlabeled issues default to beginner.
    """
    label_text = " ".join(labels).lower()

    if "good first issue" in label_text or "beginner" in label_text:
        return "beginner"
    if "intermediate" in label_text or "medium" in label_text:
        return "intermediate"
    if "advanced" in label_text or "hard" in label_text or "expert" in label_text:
        return "advanced"
    return "beginner"
