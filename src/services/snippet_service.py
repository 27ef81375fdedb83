"""Snippet service for creating, saving, deleting and moving snippets in and out."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.config import get_settings
from src.models.snippet import Snippet
from src.models.user import User
from src.schemas.snippet import SnippetCreate, SnippetUpdate
from src.services.access import get_owned_snippet, get_visible_snippet
from src.services.tag_service import TagService
from src.services.version_service import (
    INITIAL_VERSION_COMMENT,
    UPDATED_VERSION_COMMENT,
    VersionService,
)

logger = logging.getLogger(__name__)


class SnippetService:
    """Service for snippet-related operations."""

    def __init__(self, db: Session):
        self.db = db
        self.tag_service = TagService(db)
        self.version_service = VersionService(db)

    def _add_snippet(self, data: SnippetCreate, user: User) -> Snippet:
        """Insert a snippet with its tags and initial version, without committing."""
        snippet = Snippet(
            user_id=user.id,
            title=data.title,
            description=data.description,
            code=data.code,
            language=data.language,
            is_public=data.is_public,
        )
        self.db.add(snippet)
        self.tag_service.set_snippet_tags(snippet, data.tags)
        self.db.flush()  # Get snippet.id

        self.version_service.create_version(snippet, snippet.code, user.id, INITIAL_VERSION_COMMENT)
        return snippet

    def create_snippet(self, data: SnippetCreate, user: User) -> Snippet:
        """Create a snippet, link its tags and record version 1."""
        snippet = self._add_snippet(data, user)
        self.db.commit()
        self.db.refresh(snippet)
        logger.info(f"User {user.id} created snippet {snippet.id}")
        return snippet

    def get_snippet(self, snippet_id: int, user: User) -> Snippet:
        """Get a snippet the user owns or that is public."""
        return get_visible_snippet(self.db, snippet_id, user)

    def list_snippets(self, user: User) -> list[Snippet]:
        """Get all snippets owned by the user, newest first."""
        return (
            self.db.query(Snippet)
            .options(selectinload(Snippet.tags))
            .filter(Snippet.user_id == user.id)
            .order_by(Snippet.created_at.desc(), Snippet.id.desc())
            .all()
        )

    def update_snippet(self, snippet_id: int, data: SnippetUpdate, user: User) -> Snippet:
        """Apply the provided fields and record exactly one new version."""
        snippet = get_owned_snippet(self.db, snippet_id, user)

        if data.title is not None:
            snippet.title = data.title
        if data.description is not None:
            snippet.description = data.description
        if data.code is not None:
            snippet.code = data.code
        if data.language is not None:
            snippet.language = data.language
        if data.is_public is not None:
            snippet.is_public = data.is_public
        if data.tags is not None:
            self.tag_service.set_snippet_tags(snippet, data.tags)

        self.version_service.create_version(
            snippet, snippet.code, user.id, data.version_comment or UPDATED_VERSION_COMMENT
        )
        self.db.commit()
        self.db.refresh(snippet)
        logger.info(f"User {user.id} saved snippet {snippet.id}")
        return snippet

    def delete_snippet(self, snippet_id: int, user: User) -> None:
        """Permanently delete a snippet with its versions and tag links."""
        snippet = get_owned_snippet(self.db, snippet_id, user)
        self.db.delete(snippet)
        self.db.commit()
        logger.info(f"User {user.id} deleted snippet {snippet_id}")

    def toggle_favorite(self, snippet_id: int, user: User) -> Snippet:
        """Flip the favorite flag. Not a save, so no version is recorded."""
        snippet = get_owned_snippet(self.db, snippet_id, user)
        snippet.is_favorite = not snippet.is_favorite
        self.db.commit()
        self.db.refresh(snippet)
        return snippet

    def export_snippets(self, user: User, snippet_id: int | None = None) -> list[dict]:
        """Portable form of one visible snippet, or of all the user's snippets."""
        if snippet_id is not None:
            snippets = [get_visible_snippet(self.db, snippet_id, user)]
        else:
            snippets = self.list_snippets(user)
        return [
            {
                "title": snippet.title,
                "description": snippet.description,
                "code": snippet.code,
                "language": snippet.language,
                "is_public": snippet.is_public,
                "tags": snippet.tag_names,
            }
            for snippet in snippets
        ]

    def import_snippets(self, items: list[SnippetCreate], user: User) -> list[Snippet]:
        """Create several snippets at once; either all of them are stored or none."""
        try:
            snippets = [self._add_snippet(item, user) for item in items]
            self.db.commit()
        except (HTTPException, SQLAlchemyError) as e:
            self.db.rollback()
            logger.error(f"Snippet import for user {user.id} failed: {e}")
            raise

        for snippet in snippets:
            self.db.refresh(snippet)
        logger.info(f"User {user.id} imported {len(snippets)} snippet(s)")
        return snippets

    def share_link(self, snippet_id: int, user: User) -> dict:
        """Build the public URL of a snippet."""
        snippet = get_visible_snippet(self.db, snippet_id, user)
        if not snippet.is_public:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only public snippets can be shared",
            )
        base_url = get_settings().share_base_url
        return {"snippet_id": snippet.id, "url": f"{base_url}/snippets/{snippet.id}"}
