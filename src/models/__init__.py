"""SQLAlchemy models."""

from src.models.snippet import Snippet
from src.models.snippet_version import SnippetVersion
from src.models.tag import Tag, snippet_tags
from src.models.user import User

__all__ = [
    "User",
    "Snippet",
    "SnippetVersion",
    "Tag",
    "snippet_tags",
]
