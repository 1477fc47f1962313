"""
Group and membership schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.cosmos_documents import GroupType, MemberRole


class GroupCreate(BaseModel):
    """Schema for creating a study group."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    type: GroupType = GroupType.CLASS

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Group name cannot be blank")
        return v

    @field_validator("description")
    @classmethod
    def blank_description_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class GroupSummary(BaseModel):
    """A group as listed for one viewer."""

    id: str
    name: str
    description: Optional[str] = None
    type: GroupType
    role: MemberRole
    created_at: datetime


class GroupMember(BaseModel):
    """A member row joined with the member's profile."""

    user_id: str
    role: MemberRole
    display_name: Optional[str] = None
    email: Optional[str] = None
    initials: str = "?"
    joined_at: datetime


class GroupDetail(BaseModel):
    """A group with its members and the viewer's role."""

    id: str
    name: str
    description: Optional[str] = None
    type: GroupType
    created_by: str
    created_at: datetime
    viewer_role: MemberRole
    members: list[GroupMember]


class MemberAdd(BaseModel):
    """Schema for adding a member by email."""

    email: str = Field(..., min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v
