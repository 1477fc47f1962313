"""
Sticky note, home feed and search schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.cosmos_documents import NoteTag
from schemas.group import GroupSummary


class StickyNoteCreate(BaseModel):
    """Schema for posting a sticky note to a group."""

    content: str = Field(..., min_length=1, max_length=2000)
    tags: list[NoteTag] = Field(default_factory=list)
    deadline: Optional[datetime] = None
    is_pinned: bool = False

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Note content cannot be blank")
        return v


class StickyNote(BaseModel):
    """A sticky note with its author's display name."""

    id: str
    group_id: str
    content: str
    tags: list[NoteTag]
    is_pinned: bool
    deadline: Optional[datetime] = None
    created_by: str
    author_name: Optional[str] = None
    created_at: datetime


class HomeFeed(BaseModel):
    """Landing page: the viewer's groups plus pinned and recent notes from them."""

    groups: list[GroupSummary]
    pinned_notes: list[StickyNote]
    recent_notes: list[StickyNote]
