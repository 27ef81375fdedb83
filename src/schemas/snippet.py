"""Snippet schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import Language

# --- Validation helpers ---


def _normalize_language(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in Language.values():
        raise ValueError(f"Unsupported language '{value}'")
    return normalized


# --- Snippet ---


class SnippetCreate(BaseModel):
    """Create a new snippet."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    code: str = Field(..., max_length=500000)
    language: str = Field(..., max_length=50)
    is_public: bool = False
    tags: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("language")
    @classmethod
    def validate_language(cls, value: str) -> str:
        return _normalize_language(value)


class SnippetUpdate(BaseModel):
    """Update a snippet. Every save records a new version."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    code: str | None = Field(None, max_length=500000)
    language: str | None = Field(None, max_length=50)
    is_public: bool | None = None
    tags: list[str] | None = Field(None, max_length=50)  # None keeps tags, [] clears them
    version_comment: str | None = Field(None, max_length=500)

    @field_validator("language")
    @classmethod
    def validate_language(cls, value: str | None) -> str | None:
        return _normalize_language(value)


class SnippetResponse(BaseModel):
    """Snippet response with tag names."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    code: str
    language: str
    is_public: bool
    is_favorite: bool
    tags: list[str] = Field(validation_alias="tag_names")
    created_at: datetime
    updated_at: datetime


class SnippetExport(BaseModel):
    """Portable snippet form; an exported list can be posted back to import."""

    title: str
    description: str | None
    code: str
    language: str
    is_public: bool
    tags: list[str] = []


class ShareLinkResponse(BaseModel):
    """Public link for a snippet."""

    snippet_id: int
    url: str


# --- Search ---


class SearchFilters(BaseModel):
    """Filters composed into a single snippet search query."""

    query: str | None = None
    language: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    user_id: int | None = None  # None searches public snippets
    limit: int = Field(50, ge=1)
    offset: int = Field(0, ge=0)
