"""In-memory issue and user store."""

import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from issue_recommender.schemas import Issue, RawIssue, RawProfile, UserProfile


class IssueStore:
    """
    Holds cached issues and user profiles for one application instance.

    Queries never read the store directly: they receive ``snapshot()``, an
    immutable view that later writes cannot disturb.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: dict[str, UserProfile] = {}
        self._issues: dict[str, Issue] = {}

    def __len__(self) -> int:
        return len(self._issues)

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        return self._users.get(user_id)

    def get_user_by_github_id(self, github_id: int) -> Optional[UserProfile]:
        with self._lock:
            return next((u for u in self._users.values() if u.github_id == github_id), None)

    def upsert_user(self, raw: RawProfile) -> UserProfile:
        """Create a user, or update the one with the same GitHub id."""
        now = datetime.now(timezone.utc)
        with self._lock:
            existing = next((u for u in self._users.values() if u.github_id == raw.github_id), None)
            user = UserProfile(
                **raw.model_dump(),
                id=existing.id if existing else str(uuid.uuid4()),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._users[user.id] = user
        return user

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        return self._issues.get(issue_id)

    def get_issue_by_github_id(self, github_id: int) -> Optional[Issue]:
        with self._lock:
            return next((i for i in self._issues.values() if i.github_id == github_id), None)

    def upsert_issue(self, raw: RawIssue) -> Issue:
        """Create an issue, or update the one with the same GitHub id."""
        now = datetime.now(timezone.utc)
        data = raw.model_dump(exclude={"created_at", "updated_at"})
        with self._lock:
            existing = next((i for i in self._issues.values() if i.github_id == raw.github_id), None)
            if existing:
                created_at = existing.created_at
            else:
                created_at = raw.created_at or now
            issue = Issue(
                **data,
                id=existing.id if existing else str(uuid.uuid4()),
                created_at=created_at,
                updated_at=raw.updated_at or now,
            )
            self._issues[issue.id] = issue
        return issue

    def snapshot(self) -> tuple[Issue, ...]:
        with self._lock:
            return tuple(self._issues.values())
