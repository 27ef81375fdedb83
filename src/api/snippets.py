"""Snippet API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_snippet_service
from src.config import get_settings
from src.database import get_db
from src.models.user import User
from src.schemas.snippet import (
    SearchFilters,
    ShareLinkResponse,
    SnippetCreate,
    SnippetExport,
    SnippetResponse,
    SnippetUpdate,
)
from src.services.search_service import search_snippets
from src.services.snippet_service import SnippetService

settings = get_settings()

router = APIRouter(prefix="/api/v1/snippets", tags=["snippets"])


class SearchParams:
    """Query-string search filters shared by the owner and public listings."""

    def __init__(
        self,
        q: str | None = Query(default=None, max_length=255, description="Title/description text"),
        language: str | None = Query(default=None, max_length=50),
        tags: list[str] = Query(default=[], description="Snippets must carry every tag"),
        favorite: bool = Query(default=False, description="Only favorites"),
        limit: int = Query(default=50, ge=1, le=settings.search_page_size_max),
        offset: int = Query(default=0, ge=0),
    ):
        self.q = q
        self.language = language
        self.tags = tags
        self.favorite = favorite
        self.limit = limit
        self.offset = offset

    def to_filters(self, user_id: int | None) -> SearchFilters:
        return SearchFilters(
            query=self.q,
            language=self.language,
            tags=self.tags,
            is_favorite=self.favorite,
            user_id=user_id,
            limit=self.limit,
            offset=self.offset,
        )


@router.get("", response_model=list[SnippetResponse])
def get_snippets(
    params: Annotated[SearchParams, Depends()],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Search the current user's snippets, newest first."""
    return search_snippets(db, params.to_filters(current_user.id))


@router.get("/public", response_model=list[SnippetResponse])
def get_public_snippets(
    params: Annotated[SearchParams, Depends()],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Search public snippets from every user, newest first."""
    return search_snippets(db, params.to_filters(None))


@router.post("", response_model=SnippetResponse, status_code=status.HTTP_201_CREATED)
def create_snippet(
    snippet_data: SnippetCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Create a snippet. Its initial version is recorded automatically."""
    return snippet_service.create_snippet(snippet_data, current_user)


@router.get("/export", response_model=list[SnippetExport])
def export_snippets(
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Export all of the current user's snippets."""
    return snippet_service.export_snippets(current_user)


@router.post(
    "/import", response_model=list[SnippetResponse], status_code=status.HTTP_201_CREATED
)
def import_snippets(
    snippets: list[SnippetCreate],
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Import snippets (e.g. a previous export). All are created or none."""
    return snippet_service.import_snippets(snippets, current_user)


@router.get("/{snippet_id}", response_model=SnippetResponse)
def get_snippet(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Get a snippet the user owns or that is public."""
    return snippet_service.get_snippet(snippet_id, current_user)


@router.put("/{snippet_id}", response_model=SnippetResponse)
def update_snippet(
    snippet_id: int,
    snippet_data: SnippetUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Save changes to a snippet, recording a new version."""
    return snippet_service.update_snippet(snippet_id, snippet_data, current_user)


@router.delete("/{snippet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_snippet(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Permanently delete a snippet (owner only)."""
    snippet_service.delete_snippet(snippet_id, current_user)


@router.post("/{snippet_id}/favorite", response_model=SnippetResponse)
def toggle_favorite(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Toggle the favorite flag (owner only)."""
    return snippet_service.toggle_favorite(snippet_id, current_user)


@router.get("/{snippet_id}/export", response_model=SnippetExport)
def export_snippet(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Export a single snippet."""
    return snippet_service.export_snippets(current_user, snippet_id=snippet_id)[0]


@router.get("/{snippet_id}/share", response_model=ShareLinkResponse)
def share_snippet(
    snippet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    snippet_service: Annotated[SnippetService, Depends(get_snippet_service)],
):
    """Get the public link of a public snippet."""
    return snippet_service.share_link(snippet_id, current_user)
