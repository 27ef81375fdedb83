"""Snippet search: composes free text, language, tag and scope filters into one query."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

from src.models.snippet import Snippet
from src.models.tag import Tag
from src.schemas.snippet import SearchFilters
from src.services.tag_service import normalize_tag_names

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def build_search_query(db: Session, filters: SearchFilters) -> Query:
    """Build the filtered, ordered snippet query without pagination."""
    query = db.query(Snippet).options(selectinload(Snippet.tags))

    # Scope: one owner's snippets (private included) or the public gallery
    if filters.user_id is not None:
        query = query.filter(Snippet.user_id == filters.user_id)
    else:
        query = query.filter(Snippet.is_public.is_(True))

    text = (filters.query or "").strip()
    if text:
        pattern = f"%{escape_like(text)}%"
        query = query.filter(
            or_(
                Snippet.title.ilike(pattern, escape=LIKE_ESCAPE),
                Snippet.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    language = (filters.language or "").strip().lower()
    if language:
        query = query.filter(Snippet.language == language)

    if filters.is_favorite:
        query = query.filter(Snippet.is_favorite.is_(True))

    # Every requested tag must be present
    for tag_name in normalize_tag_names(filters.tags):
        query = query.filter(Snippet.tags.any(Tag.name == tag_name))

    return query.order_by(Snippet.created_at.desc(), Snippet.id.desc())


def search_snippets(db: Session, filters: SearchFilters) -> list[Snippet]:
    """Search snippets, newest first."""
    snippets = build_search_query(db, filters).offset(filters.offset).limit(filters.limit).all()
    logger.debug(f"Search {filters.model_dump(exclude_defaults=True)} -> {len(snippets)} result(s)")
    return snippets
