"""Snippet version API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_version_service
from src.config import get_settings
from src.models.user import User
from src.schemas.snippet import SnippetResponse
from src.schemas.version import (
    RecentChangeResponse,
    VersionCreate,
    VersionDiffResponse,
    VersionResponse,
)
from src.services.version_service import VersionService

settings = get_settings()

router = APIRouter(prefix="/api/v1", tags=["versions"])


@router.get("/versions/recent", response_model=list[RecentChangeResponse])
def get_recent_changes(
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
    limit: int = Query(default=settings.recent_changes_limit, ge=1, le=50),
):
    """Get the latest versions the current user recorded, for the dashboard."""
    return version_service.recent_changes(current_user, limit)


@router.get("/snippets/{snippet_id}/versions", response_model=list[VersionResponse])
def get_versions(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
):
    """Get the version history of a snippet, newest first."""
    return version_service.list_versions(snippet_id, current_user)


@router.post(
    "/snippets/{snippet_id}/versions",
    response_model=VersionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_checkpoint(
    snippet_id: int,
    version_data: VersionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
):
    """Record the current code as a version with a comment (owner only)."""
    return version_service.checkpoint(snippet_id, current_user, version_data.comment)


@router.get("/snippets/{snippet_id}/versions/{version_id}", response_model=VersionResponse)
def get_version(
    snippet_id: int,
    version_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
):
    """Get a single version."""
    return version_service.get_version(snippet_id, version_id, current_user)


@router.get(
    "/snippets/{snippet_id}/versions/{version_id}/diff", response_model=VersionDiffResponse
)
def diff_version(
    snippet_id: int,
    version_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
):
    """Diff a version against the snippet's current code."""
    return version_service.diff_version(snippet_id, version_id, current_user)


@router.post(
    "/snippets/{snippet_id}/versions/{version_id}/restore", response_model=SnippetResponse
)
def restore_version(
    snippet_id: int,
    version_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    version_service: Annotated[VersionService, Depends(get_version_service)],
):
    """Restore a version's code onto the snippet (owner only)."""
    return version_service.restore_version(snippet_id, version_id, current_user)
