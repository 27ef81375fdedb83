"""Snippet visibility and ownership checks."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from src.models.snippet import Snippet
from src.models.user import User


def get_visible_snippet(db: Session, snippet_id: int, user: User) -> Snippet:
    """Get a snippet the user owns or that is public.

    Private snippets of other users are reported as missing rather than
    forbidden so their existence does not leak.
    """
    snippet = db.query(Snippet).filter(Snippet.id == snippet_id).first()
    if snippet is None or (snippet.user_id != user.id and not snippet.is_public):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Snippet not found")
    return snippet


def get_owned_snippet(db: Session, snippet_id: int, user: User) -> Snippet:
    """Get a snippet the user may modify."""
    snippet = get_visible_snippet(db, snippet_id, user)
    if snippet.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can modify this snippet",
        )
    return snippet
