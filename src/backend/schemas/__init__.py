"""Schemas module initialization."""

from schemas.calculator import CalculatorRequest, CalculatorState
from schemas.group import GroupCreate, GroupDetail, GroupMember, GroupSummary, MemberAdd
from schemas.note import HomeFeed, StickyNote, StickyNoteCreate
from schemas.personal_note import PersonalNote, PersonalNoteCreate, PersonalNoteUpdate
from schemas.poll import PollCreate, PollOptionResult, PollWithResults, VoteCreate
from schemas.profile import ProfileResponse, Viewer
from schemas.timetable import (
    TimetableAlert,
    TimetableEvent,
    TimetableEventCreate,
    TimetableEventUpdate,
)

__all__ = [
    "CalculatorRequest",
    "CalculatorState",
    "GroupCreate",
    "GroupDetail",
    "GroupMember",
    "GroupSummary",
    "MemberAdd",
    "HomeFeed",
    "StickyNote",
    "StickyNoteCreate",
    "PersonalNote",
    "PersonalNoteCreate",
    "PersonalNoteUpdate",
    "PollCreate",
    "PollOptionResult",
    "PollWithResults",
    "VoteCreate",
    "ProfileResponse",
    "Viewer",
    "TimetableAlert",
    "TimetableEvent",
    "TimetableEventCreate",
    "TimetableEventUpdate",
]
