"""
Poll-related Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.config import settings


class PollCreate(BaseModel):
    """
    Schema for creating a group poll.

    The question is trimmed; blank options are dropped before the option
    count is checked.
    """

    question: str = Field(..., min_length=1, max_length=500)
    options: list[str]
    is_anonymous: bool = False
    closes_at: Optional[datetime] = None

    @field_validator("question")
    @classmethod
    def strip_question(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Question cannot be blank")
        return v

    @field_validator("options")
    @classmethod
    def drop_blank_options(cls, v: list[str]) -> list[str]:
        return [option.strip() for option in v if option.strip()]

    @model_validator(mode="after")
    def check_option_count(self) -> "PollCreate":
        count = len(self.options)
        if not settings.POLL_MIN_OPTIONS <= count <= settings.POLL_MAX_OPTIONS:
            raise ValueError(
                f"A poll needs between {settings.POLL_MIN_OPTIONS} and "
                f"{settings.POLL_MAX_OPTIONS} non-blank options, got {count}"
            )
        return self


class PollOptionResult(BaseModel):
    """One option with its tally. voters is None for anonymous polls."""

    index: int
    text: str
    vote_count: int = 0
    vote_percentage: int = 0
    voters: Optional[list[str]] = None


class PollWithResults(BaseModel):
    """Poll with its live tally and the viewer's vote state."""

    id: str
    group_id: str
    question: str
    created_by: str
    is_anonymous: bool
    closes_at: Optional[datetime] = None
    created_at: datetime
    options: list[PollOptionResult]
    total_votes: int = 0
    has_voted: bool = False
    viewer_option_index: Optional[int] = None


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    option_index: int
