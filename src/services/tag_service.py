"""Tag service: idempotent tag creation and snippet tag links."""

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.snippet import Snippet
from src.models.tag import Tag

logger = logging.getLogger(__name__)

MAX_TAG_LENGTH = 100


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Strip and lowercase tag names, dropping blanks and duplicates.

    The first occurrence of each name wins, so the input order is kept.
    """
    seen: set[str] = set()
    result = []
    for name in names:
        normalized = name.strip().lower()
        if not normalized or normalized in seen:
            continue
        if len(normalized) > MAX_TAG_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Tag names are limited to {MAX_TAG_LENGTH} characters",
            )
        seen.add(normalized)
        result.append(normalized)
    return result


class TagService:
    """Service for tag-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_or_create_tags(self, names: Iterable[str]) -> list[Tag]:
        """Return one Tag row per distinct name, creating the missing ones.

        Existing rows are reused by name, so calling this twice with the same
        names does not create anything the second time.
        """
        normalized = normalize_tag_names(names)
        if not normalized:
            return []

        by_name = {tag.name: tag for tag in self._find_tags(normalized)}
        created = 0
        for name in normalized:
            if name not in by_name:
                by_name[name] = self._create_tag(name)
                created += 1

        if created:
            logger.debug(f"Created {created} new tag(s)")
        return [by_name[name] for name in normalized]

    def _find_tags(self, names: list[str]) -> list[Tag]:
        return self.db.query(Tag).filter(Tag.name.in_(names)).all()

    def _create_tag(self, name: str) -> Tag:
        """Insert a tag in a SAVEPOINT, reusing the row if another writer won the race."""
        savepoint = self.db.begin_nested()
        tag = Tag(name=name)
        self.db.add(tag)
        try:
            self.db.flush()
        except IntegrityError:
            savepoint.rollback()
            logger.warning(f"Tag '{name}' was created concurrently, reusing it")
            return self.db.query(Tag).filter(Tag.name == name).one()
        savepoint.commit()
        return tag

    def set_snippet_tags(self, snippet: Snippet, names: Iterable[str]) -> list[Tag]:
        """Replace the snippet's tag links with exactly the given set."""
        tags = self.get_or_create_tags(names)
        snippet.tags = tags
        return tags

    def list_tags(self) -> list[Tag]:
        """Get all tags ordered by name."""
        return self.db.query(Tag).order_by(Tag.name).all()
