"""Free-text matching of issues against a search term."""

from typing import Iterator, Optional

from issue_recommender.schemas import Issue


def _searchable_fields(issue: Issue) -> Iterator[Optional[str]]:
    yield issue.title
    yield issue.body
    yield issue.repository_name
    yield issue.repository_owner
    yield issue.language
    yield from issue.labels


def matches(issue: Issue, term: str) -> bool:
    """
    Check whether a search term occurs in any searchable field of an issue.

    Matching is plain case-insensitive substring containment over the title,
    body, repository name and owner, language and every label. Missing
    optional fields simply do not match.

    Args:
        issue: Issue to test
        term: Trimmed, non-empty search term

    Returns:
        True if the term is found in at least one field
    """
    needle = term.casefold()
    return any(
        field is not None and needle in field.casefold()
        for field in _searchable_fields(issue)
    )
