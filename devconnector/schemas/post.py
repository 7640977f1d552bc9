from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from devconnector.schemas.common import require_text


class PostCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def _validate_text(cls, v: str) -> str:
        return require_text(v, "Text is required")


class PostRead(BaseModel):
    id: int
    user_id: int
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
