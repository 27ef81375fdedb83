"""Profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Update the current user's profile. Role is not editable here."""

    full_name: str | None = Field(None, max_length=255)
    avatar_url: str | None = Field(None, max_length=1024)


class ProfileResponse(BaseModel):
    """Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str | None
    avatar_url: str | None
    role: str
    created_at: datetime
    updated_at: datetime
