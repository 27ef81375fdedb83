"""Version service for snippet history, diffs and restores."""

import difflib
import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from src.config import get_settings
from src.models.snippet import Snippet
from src.models.snippet_version import SnippetVersion
from src.models.user import User
from src.services.access import get_owned_snippet, get_visible_snippet

logger = logging.getLogger(__name__)

INITIAL_VERSION_COMMENT = "Initial version"
UPDATED_VERSION_COMMENT = "Updated snippet"
CHECKPOINT_VERSION_COMMENT = "Manual checkpoint"
NO_NEWLINE_MARKER = "\\ No newline at end of file"


def restored_comment(version_number: int) -> str:
    return f"Restored from version {version_number}"


def _diff_input(code: str) -> list[str]:
    """Split code for difflib, keeping line endings.

    A last line without a newline is marked the way `diff -u` does, so adding
    or dropping a trailing newline still shows up as a change.
    """
    lines = code.splitlines(keepends=True)
    if lines and lines[-1].splitlines() == [lines[-1]]:
        lines[-1] += f"\n{NO_NEWLINE_MARKER}\n"
    return lines


class VersionService:
    """Service for the append-only snippet version log."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def next_version_number(self, snippet_id: int) -> int:
        """One past the highest version number recorded for the snippet."""
        current = (
            self.db.query(func.max(SnippetVersion.version_number))
            .filter(SnippetVersion.snippet_id == snippet_id)
            .scalar()
        )
        return (current or 0) + 1

    def create_version(
        self,
        snippet: Snippet,
        code: str,
        author_id: int,
        comment: str | None = None,
    ) -> SnippetVersion:
        """Append a version of `code` to the snippet's history.

        The insert runs in a SAVEPOINT. If another writer claimed the same
        number first, the unique constraint fires, the savepoint is rolled back
        and the number is recomputed. The caller owns the outer commit.
        """
        attempts = self.settings.version_retry_attempts
        for attempt in range(1, attempts + 1):
            savepoint = self.db.begin_nested()
            version = SnippetVersion(
                snippet_id=snippet.id,
                user_id=author_id,
                version_number=self.next_version_number(snippet.id),
                code=code,
                comment=comment,
            )
            self.db.add(version)
            try:
                self.db.flush()
            except IntegrityError:
                savepoint.rollback()
                logger.warning(
                    f"Version number collision on snippet {snippet.id} "
                    f"(attempt {attempt}/{attempts})"
                )
                continue
            savepoint.commit()
            logger.debug(f"Snippet {snippet.id}: recorded version {version.version_number}")
            return version

        logger.error(f"Gave up recording a version for snippet {snippet.id}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Snippet was modified concurrently, please retry",
        )

    def list_versions(self, snippet_id: int, user: User) -> list[SnippetVersion]:
        """Get the versions of a visible snippet, newest first."""
        get_visible_snippet(self.db, snippet_id, user)
        return (
            self.db.query(SnippetVersion)
            .filter(SnippetVersion.snippet_id == snippet_id)
            .order_by(SnippetVersion.version_number.desc())
            .all()
        )

    def get_version(self, snippet_id: int, version_id: int, user: User) -> SnippetVersion:
        """Get one version of a visible snippet."""
        get_visible_snippet(self.db, snippet_id, user)
        return self._get_snippet_version(snippet_id, version_id)

    def _get_snippet_version(self, snippet_id: int, version_id: int) -> SnippetVersion:
        version = (
            self.db.query(SnippetVersion)
            .filter(SnippetVersion.id == version_id, SnippetVersion.snippet_id == snippet_id)
            .first()
        )
        if version is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Version not found")
        return version

    def diff_version(self, snippet_id: int, version_id: int, user: User) -> dict:
        """Diff a version against the snippet's current code.

        Returns:
            {
                "snippet_id": int,
                "version_id": int,
                "version_number": int,
                "diff": str,  # unified diff, empty when identical
                "added": int,
                "removed": int,
                "identical": bool,
            }
        """
        snippet = get_visible_snippet(self.db, snippet_id, user)
        version = self._get_snippet_version(snippet_id, version_id)

        diff_lines = list(
            difflib.unified_diff(
                _diff_input(version.code),
                _diff_input(snippet.code),
                fromfile=f"version {version.version_number}",
                tofile="current",
            )
        )
        # Skip the ---/+++ file headers when counting
        body = diff_lines[2:]
        added = sum(1 for line in body if line.startswith("+"))
        removed = sum(1 for line in body if line.startswith("-"))

        return {
            "snippet_id": snippet.id,
            "version_id": version.id,
            "version_number": version.version_number,
            "diff": "".join(diff_lines),
            "added": added,
            "removed": removed,
            "identical": not diff_lines,
        }

    def restore_version(self, snippet_id: int, version_id: int, user: User) -> Snippet:
        """Copy a version's code onto the snippet and record the restore as a new version."""
        snippet = get_owned_snippet(self.db, snippet_id, user)
        version = self._get_snippet_version(snippet_id, version_id)

        snippet.code = version.code
        self.create_version(snippet, version.code, user.id, restored_comment(version.version_number))
        self.db.commit()
        self.db.refresh(snippet)

        logger.info(f"Snippet {snippet.id}: restored version {version.version_number}")
        return snippet

    def checkpoint(self, snippet_id: int, user: User, comment: str | None = None) -> SnippetVersion:
        """Record the snippet's current code as a version with an explicit comment."""
        snippet = get_owned_snippet(self.db, snippet_id, user)
        version = self.create_version(
            snippet, snippet.code, user.id, comment or CHECKPOINT_VERSION_COMMENT
        )
        self.db.commit()
        self.db.refresh(version)
        return version

    def recent_changes(self, user: User, limit: int | None = None) -> list[SnippetVersion]:
        """Get the newest versions authored by the user, with their snippets loaded."""
        return (
            self.db.query(SnippetVersion)
            .options(joinedload(SnippetVersion.snippet))
            .filter(SnippetVersion.user_id == user.id)
            .order_by(SnippetVersion.created_at.desc(), SnippetVersion.id.desc())
            .limit(limit or self.settings.recent_changes_limit)
            .all()
        )
