"""Tag and language API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_tag_service
from src.models.enums import Language
from src.models.user import User
from src.schemas.tag import TagResponse
from src.services.tag_service import TagService

router = APIRouter(prefix="/api/v1", tags=["tags"])


@router.get("/tags", response_model=list[TagResponse])
def get_tags(
    current_user: Annotated[User, Depends(get_current_user)],
    tag_service: Annotated[TagService, Depends(get_tag_service)],
):
    """Get all tags, ordered by name."""
    return tag_service.list_tags()


@router.get("/languages", response_model=list[str])
def get_languages():
    """Get the supported snippet languages."""
    return Language.values()
