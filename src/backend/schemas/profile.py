"""
Viewer and profile schemas.
"""

from typing import Optional

from pydantic import BaseModel


class Viewer(BaseModel):
    """The authenticated user making the request, taken from token claims."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class ProfileResponse(BaseModel):
    """The viewer's profile page."""

    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    initials: str = "?"
    group_count: int = 0
    note_count: int = 0
