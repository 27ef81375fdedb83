"""Snippet version model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreatedAtMixin


class SnippetVersion(Base, CreatedAtMixin):
    """Append-only snapshot of a snippet's code.

    Version numbers increase by one per snippet. The unique constraint turns a
    concurrent writer claiming the same number into an IntegrityError instead of
    a silent duplicate.
    """

    __tablename__ = "snippet_versions"
    __table_args__ = (
        UniqueConstraint("snippet_id", "version_number", name="uq_snippet_versions_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    snippet_id = Column(
        Integer, ForeignKey("snippets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    version_number = Column(Integer, nullable=False)
    code = Column(Text, nullable=False)
    comment = Column(String(500), nullable=True)

    # Relationships
    snippet = relationship("Snippet", back_populates="versions")
    author = relationship("User")
