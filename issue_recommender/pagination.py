from typing import Sequence, TypeVar

from issue_recommender.schemas import MAX_LIMIT

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """Slice one page out of an ordered sequence; pages past the end are empty."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    start = (page - 1) * limit
    return list(items[start:start + limit])
