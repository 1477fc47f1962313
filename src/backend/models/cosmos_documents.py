"""
Cosmos DB document models for StudySync.

These Pydantic models define the document structure stored in Cosmos DB.

Container Strategy:
- profiles: User profiles (partition: /id)
- groups: Study groups (partition: /id)
- group-members: Membership rows, id = "<group_id>:<user_id>" (partition: /group_id)
- sticky-notes: Group sticky notes (partition: /group_id)
- polls: Group polls with a fixed option list (partition: /group_id)
- poll-votes: One vote per user per poll, id derived from both (partition: /poll_id)
- personal-notes: Private notes pad (partition: /user_id)
- timetable-events: Weekly class timetable (partition: /user_id)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Enums
# ============================================================================


class GroupType(str, Enum):
    """Kind of study group."""

    CLASS = "class"
    CLUB = "club"
    LAB = "lab"
    OTHER = "other"


class MemberRole(str, Enum):
    """Role of a member within a group."""

    ADMIN = "admin"
    MEMBER = "member"


class NoteTag(str, Enum):
    """Fixed tag set for sticky notes."""

    EXAM = "exam"
    ASSIGNMENT = "assignment"
    DEADLINE = "deadline"
    PROJECT = "project"
    LECTURE = "lecture"
    MEETING = "meeting"
    IMPORTANT = "important"


class NoteColor(str, Enum):
    """Personal note palette."""

    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    PINK = "pink"
    PURPLE = "purple"
    ORANGE = "orange"


class EventColor(str, Enum):
    """Timetable event palette."""

    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    PINK = "pink"
    RED = "red"


# Allowed alert lead times in minutes (0 disables the alert)
ALERT_LEAD_MINUTES = (0, 5, 10, 15, 30, 60)


# ============================================================================
# Base Document Model
# ============================================================================


class CosmosDocument(BaseModel):
    """
    Base class for Cosmos DB documents.

    All documents have:
    - id: Unique identifier within the container partition
    - _ts / _etag: System properties managed by Cosmos DB (kept as extras)
    """

    id: str = Field(default_factory=lambda: str(uuid4()))

    model_config = {"extra": "allow", "use_enum_values": True}


# ============================================================================
# Profiles
# ============================================================================


class ProfileDocument(CosmosDocument):
    """
    Profile document stored in the 'profiles' container.

    Partition key: /id (same as the identity provider's user id)
    """

    email: Optional[str] = None
    phone: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def initials(self) -> str:
        """Up to two upper-case initials from the display name, "?" if unknown."""
        if not self.display_name:
            return "?"
        letters = [part[0] for part in self.display_name.split() if part]
        return "".join(letters).upper()[:2] or "?"


# ============================================================================
# Groups
# ============================================================================


class GroupDocument(CosmosDocument):
    """
    Group document stored in the 'groups' container.

    Partition key: /id
    """

    name: str
    description: Optional[str] = None
    type: GroupType = GroupType.CLASS
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class GroupMemberDocument(CosmosDocument):
    """
    Membership row stored in the 'group-members' container.

    Partition key: /group_id
    The id is derived from group and user so a duplicate insert conflicts.
    """

    group_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: datetime = Field(default_factory=utc_now)

    @staticmethod
    def make_id(group_id: str, user_id: str) -> str:
        return f"{group_id}:{user_id}"

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN.value


# ============================================================================
# Sticky Notes
# ============================================================================


class StickyNoteDocument(CosmosDocument):
    """
    Sticky note stored in the 'sticky-notes' container.

    Partition key: /group_id
    """

    group_id: str
    created_by: str
    content: str
    tags: list[NoteTag] = Field(default_factory=list)
    is_pinned: bool = False
    deadline: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# Polls and Votes
# ============================================================================


class PollDocument(CosmosDocument):
    """
    Poll stored in the 'polls' container.

    Partition key: /group_id
    Options are fixed at creation; results are derived from votes on read.
    """

    group_id: str
    created_by: str
    question: str
    options: list[str]
    is_anonymous: bool = False
    closes_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)


class VoteDocument(CosmosDocument):
    """
    Vote stored in the 'poll-votes' container.

    Partition key: /poll_id
    Insert-only. The id is derived from (poll_id, user_id) so the store
    rejects a second vote by the same user.
    """

    poll_id: str
    user_id: str
    option_index: int
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# Personal Notes
# ============================================================================


class PersonalNoteDocument(CosmosDocument):
    """
    Private note stored in the 'personal-notes' container.

    Partition key: /user_id
    """

    user_id: str
    title: str
    content: str
    color: NoteColor = NoteColor.YELLOW
    is_pinned: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# Timetable
# ============================================================================


class TimetableEventDocument(CosmosDocument):
    """
    Weekly timetable entry stored in the 'timetable-events' container.

    Partition key: /user_id
    Times are "HH:MM" wall-clock strings; day_of_week is 0 (Sunday) to 6.
    """

    user_id: str
    title: str
    description: Optional[str] = None
    day_of_week: int
    start_time: str
    end_time: str
    location: Optional[str] = None
    color: EventColor = EventColor.BLUE
    alert_before: int = 15  # Minutes before start, 0 disables
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def start_minute(self) -> int:
        """Start time as minutes after midnight."""
        hours, minutes = self.start_time.split(":")[:2]
        return int(hours) * 60 + int(minutes)
