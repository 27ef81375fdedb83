"""Snippet version schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VersionCreate(BaseModel):
    """Record a manual checkpoint of the current code."""

    comment: str | None = Field(None, max_length=500)


class VersionResponse(BaseModel):
    """Snippet version response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    snippet_id: int
    user_id: int
    version_number: int
    code: str
    comment: str | None
    created_at: datetime


class VersionDiffResponse(BaseModel):
    """Unified diff from a version to the snippet's current code."""

    snippet_id: int
    version_id: int
    version_number: int
    diff: str
    added: int
    removed: int
    identical: bool


class SnippetSummary(BaseModel):
    """Minimal snippet info attached to recent changes."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    language: str


class RecentChangeResponse(BaseModel):
    """A version authored by the current user, with its snippet."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    version_number: int
    comment: str | None
    created_at: datetime
    snippet: SnippetSummary
