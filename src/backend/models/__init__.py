"""Document models module."""

from models.cosmos_documents import (
    ALERT_LEAD_MINUTES,
    EventColor,
    GroupDocument,
    GroupMemberDocument,
    GroupType,
    MemberRole,
    NoteColor,
    NoteTag,
    PersonalNoteDocument,
    PollDocument,
    ProfileDocument,
    StickyNoteDocument,
    TimetableEventDocument,
    VoteDocument,
)

__all__ = [
    "ALERT_LEAD_MINUTES",
    "EventColor",
    "GroupDocument",
    "GroupMemberDocument",
    "GroupType",
    "MemberRole",
    "NoteColor",
    "NoteTag",
    "PersonalNoteDocument",
    "PollDocument",
    "ProfileDocument",
    "StickyNoteDocument",
    "TimetableEventDocument",
    "VoteDocument",
]
