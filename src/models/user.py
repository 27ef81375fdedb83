"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.enums import UserRole
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, ownership and profile data."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
