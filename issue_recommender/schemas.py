from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Difficulty = Literal["beginner", "intermediate", "advanced"]
RepositorySize = Literal["any", "small", "medium", "large"]
SortBy = Literal["recent", "stars", "match", "comments"]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawIssue(CamelModel):
    """Issue data normalized from GitHub, before the store assigns identity."""

    github_id: int
    number: int
    title: str
    body: Optional[str] = None
    state: str = "open"
    labels: list[str] = Field(default_factory=list)
    language: Optional[str] = None
    repository_name: str
    repository_owner: str
    repository_stars: int = Field(default=0, ge=0)
    repository_forks: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    difficulty: Optional[Difficulty] = None
    is_recommended: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _naive_is_utc(cls, value):
        return _as_utc(value)


class Issue(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    github_id: int
    number: int
    title: str
    body: Optional[str] = None
    state: str = "open"
    labels: tuple[str, ...] = ()
    language: Optional[str] = None
    repository_name: str
    repository_owner: str
    repository_stars: int = Field(default=0, ge=0)
    repository_forks: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    difficulty: Optional[Difficulty] = None
    is_recommended: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("repository_stars", "repository_forks", "comments", mode="before")
    @classmethod
    def _absent_count_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _naive_is_utc(cls, value):
        return _as_utc(value)


class RawProfile(CamelModel):
    """GitHub user data plus the languages derived from their repositories."""

    github_id: int
    username: str
    avatar_url: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    top_languages: list[str] = Field(default_factory=list)


class UserProfile(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    github_id: int
    username: str
    avatar_url: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    top_languages: tuple[str, ...] = ()
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _naive_is_utc(cls, value):
        return _as_utc(value)


class Filters(CamelModel):
    """
    Validated, fully-populated query parameters.

    Building this model is the only validation step: the query engine
    assumes every field already holds a legal value.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    languages: frozenset[str] = frozenset()
    difficulty: frozenset[Difficulty] = frozenset()
    repository_size: RepositorySize = "any"
    sort_by: SortBy = "recent"
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @field_validator("search", mode="before")
    @classmethod
    def _trim_search(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("languages", "difficulty", mode="before")
    @classmethod
    def _drop_blank_entries(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return [item for item in value if not isinstance(item, str) or item.strip()]


class QueryResult(BaseModel):
    items: list[Issue]
    total: int


class LanguageCount(BaseModel):
    name: str
    count: int


class IssueStats(CamelModel):
    total_issues: int
    recommended_issues: int
    new_issues: int
    top_languages: list[LanguageCount]
    difficulty_counts: dict[str, int]
