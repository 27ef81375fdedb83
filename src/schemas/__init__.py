"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, Token, UserLogin, UserRegister, UserResponse
from src.schemas.profile import ProfileResponse, ProfileUpdate
from src.schemas.snippet import (
    SearchFilters,
    ShareLinkResponse,
    SnippetCreate,
    SnippetExport,
    SnippetResponse,
    SnippetUpdate,
)
from src.schemas.tag import TagResponse
from src.schemas.version import (
    RecentChangeResponse,
    VersionCreate,
    VersionDiffResponse,
    VersionResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "Token",
    "AuthResponse",
    "UserResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "SnippetCreate",
    "SnippetUpdate",
    "SnippetResponse",
    "SnippetExport",
    "ShareLinkResponse",
    "SearchFilters",
    "TagResponse",
    "VersionCreate",
    "VersionResponse",
    "VersionDiffResponse",
    "RecentChangeResponse",
]
