"""Tag schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TagResponse(BaseModel):
    """Tag response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
