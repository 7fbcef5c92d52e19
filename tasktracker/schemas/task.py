from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


def _clean_title(v: Optional[str]) -> str:
    if v is None:
        raise ValueError("title cannot be null")
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty")
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return v


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def title_valid(cls, v):
        return _clean_title(v)


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: Optional[StrictBool] = None

    @field_validator("title")
    @classmethod
    def title_valid(cls, v):
        return _clean_title(v)

    @field_validator("completed")
    @classmethod
    def completed_not_null(cls, v):
        if v is None:
            raise ValueError("completed must be true or false")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values; everything is stored in UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
