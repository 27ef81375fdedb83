"""Snippet model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.tag import snippet_tags


class Snippet(Base, TimestampMixin):
    """A saved unit of code with metadata, owned by one user."""

    __tablename__ = "snippets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    code = Column(Text, nullable=False)
    language = Column(String(50), nullable=False, index=True)
    is_public = Column(Boolean, nullable=False, default=False, index=True)
    is_favorite = Column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship("User", backref="snippets")
    tags = relationship(
        "Tag", secondary=snippet_tags, back_populates="snippets", order_by="Tag.name"
    )
    versions = relationship(
        "SnippetVersion",
        back_populates="snippet",
        cascade="all, delete-orphan",
        order_by="SnippetVersion.version_number.desc()",
    )

    @property
    def tag_names(self) -> list[str]:
        """Names of the tags attached to this snippet."""
        return [tag.name for tag in self.tags]
