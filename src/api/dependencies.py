"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.snippet_service import SnippetService
from src.services.tag_service import TagService
from src.services.version_service import VersionService

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise _unauthorized("Invalid authentication credentials")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid authentication credentials") from None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_snippet_service(
    db: Annotated[Session, Depends(get_db)],
) -> SnippetService:
    """Get snippet service with dependencies."""
    return SnippetService(db)


def get_version_service(
    db: Annotated[Session, Depends(get_db)],
) -> VersionService:
    """Get version service with dependencies."""
    return VersionService(db)


def get_tag_service(
    db: Annotated[Session, Depends(get_db)],
) -> TagService:
    """Get tag service with dependencies."""
    return TagService(db)
