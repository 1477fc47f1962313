"""
Personal note schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.cosmos_documents import NoteColor


def _required_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class PersonalNoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    color: NoteColor = NoteColor.YELLOW
    is_pinned: bool = False

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _required_text(v)


class PersonalNoteUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    color: Optional[NoteColor] = None
    is_pinned: Optional[bool] = None

    @field_validator("title", "content")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _required_text(v)


class PersonalNote(BaseModel):
    id: str
    title: str
    content: str
    color: NoteColor
    is_pinned: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
