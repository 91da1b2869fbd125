"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from github import GithubException
from pydantic import ValidationError

from issue_recommender.config import Settings, get_settings
from issue_recommender.engine import compute_stats, query_issues, query_recommended
from issue_recommender.github_service import GitHubService
from issue_recommender.pipeline import sync_issues, sync_user
from issue_recommender.schemas import Filters, IssueStats, QueryResult, UserProfile
from issue_recommender.store import IssueStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> IssueStore:
    """Dependency to get the application's issue store."""
    return request.app.state.store


def get_github_service(request: Request) -> GitHubService:
    """Dependency to get GitHub service instance."""
    github_service = request.app.state.github_service
    if github_service is None:
        raise HTTPException(status_code=500, detail="GitHub service not initialized")
    return github_service


def get_filters(
    search: Optional[str] = None,
    languages: List[str] = Query(default=[]),
    difficulty: List[str] = Query(default=[]),
    repository_size: Optional[str] = Query(default=None, alias="repositorySize"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Filters:
    """
    Dependency that validates query parameters into Filters.

    Omitted parameters take the Filters defaults. Invalid values are
    rejected with 400 rather than passed on to the query engine.
    """
    raw = {
        "search": search,
        "languages": languages,
        "difficulty": difficulty,
        "repository_size": repository_size,
        "sort_by": sort_by,
        "page": page,
        "limit": limit,
    }
    try:
        return Filters.model_validate({k: v for k, v in raw.items() if v is not None})
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Invalid filters",
                "errors": e.errors(include_url=False, include_context=False, include_input=False),
            },
        )


@router.get("/healthz")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/api/issues", response_model=QueryResult)
def list_issues(
    filters: Filters = Depends(get_filters),
    store: IssueStore = Depends(get_store),
) -> QueryResult:
    """List cached issues with filtering, sorting and pagination."""
    return query_issues(store.snapshot(), filters)


@router.get("/api/users/{user_id}/recommended-issues", response_model=QueryResult)
def recommended_issues(
    user_id: str,
    filters: Filters = Depends(get_filters),
    store: IssueStore = Depends(get_store),
) -> QueryResult:
    """
    Get personalized issue recommendations.

    An unknown user gets an empty result rather than an error.
    """
    return query_recommended(store.snapshot(), user_id, store.get_user, filters)


@router.get("/api/users/{user_id}", response_model=UserProfile)
def get_user(user_id: str, store: IssueStore = Depends(get_store)) -> UserProfile:
    """Get a stored user profile."""
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/api/users/github/{username}", response_model=UserProfile)
async def sync_github_user(
    username: str,
    store: IssueStore = Depends(get_store),
    github_service: GitHubService = Depends(get_github_service),
) -> UserProfile:
    """Create or refresh a user profile from their GitHub account."""
    try:
        return await sync_user(store, github_service, username)
    except GithubException as e:
        logger.error(f"Error fetching GitHub user {username}: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch GitHub user data: {e}"
        )


@router.post("/api/sync-issues")
async def sync_github_issues(
    store: IssueStore = Depends(get_store),
    github_service: GitHubService = Depends(get_github_service),
    settings: Settings = Depends(get_settings),
):
    """Sync beginner-friendly GitHub issues into the store."""
    count = await sync_issues(store, github_service, per_query=settings.SYNC_PER_QUERY)
    return {"message": f"Successfully synced {count} issues", "count": count}


@router.get("/api/stats", response_model=IssueStats)
def get_stats(store: IssueStore = Depends(get_store)) -> IssueStats:
    """Summary statistics over all cached issues."""
    return compute_stats(store.snapshot())


def create_app(
    store: Optional[IssueStore] = None,
    github_service: Optional[GitHubService] = None,
) -> FastAPI:
    """
    Build the application around an explicit store.

    Args:
        store: Issue store to serve from; a fresh empty one by default
        github_service: GitHub client; created from settings at startup if omitted

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application startup and shutdown."""
        logger.info("🚀 Starting up application...")

        if app.state.github_service is None:
            settings = get_settings()
            app.state.github_service = GitHubService(
                token=settings.GH_TOKEN,
                profile_repo_sample=settings.PROFILE_REPO_SAMPLE,
                top_languages_limit=settings.TOP_LANGUAGES_LIMIT,
            )
            logger.info(f"✅ GitHub service initialized (authenticated: {bool(settings.GH_TOKEN)})")

        yield

        logger.info("🛑 Shutting down application...")

    app = FastAPI(
        title="Open Source Issue Recommender",
        description="Filter, rank and recommend cached GitHub issues",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store if store is not None else IssueStore()
    app.state.github_service = github_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allows all origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    """Main entry point for the CLI script."""
    import uvicorn

    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL)
    uvicorn.run(
        "issue_recommender.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )


if __name__ == "__main__":
    main()
