"""
Domain exceptions raised by engines and services.

API routes translate these into HTTP responses; nothing here is fatal
to the process.
"""


class StudySyncError(Exception):
    """Base class for StudySync domain errors."""


# ============================================================================
# Calculator
# ============================================================================


class CalculatorError(StudySyncError):
    """Base class for calculator engine errors."""


class DomainError(CalculatorError, ValueError):
    """Raised when a function is applied outside the domain it is defined on."""


class UnknownKeyError(CalculatorError, KeyError):
    """Raised when a keystroke label is not recognised."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown calculator key: {self.key!r}"


# ============================================================================
# Polls
# ============================================================================


class VoteRejectedError(StudySyncError):
    """Base class for rejected vote submissions."""


class AlreadyVotedError(VoteRejectedError):
    """The viewer already has a vote on this poll."""

    def __init__(self, poll_id: str, user_id: str):
        super().__init__(f"User {user_id} has already voted on poll {poll_id}")
        self.poll_id = poll_id
        self.user_id = user_id


class InvalidOptionError(VoteRejectedError):
    """The chosen option index is outside the poll's option list."""

    def __init__(self, option_index: int, option_count: int):
        super().__init__(f"Option index {option_index} is outside [0, {option_count})")
        self.option_index = option_index
        self.option_count = option_count


# ============================================================================
# Groups
# ============================================================================


class AlreadyMemberError(StudySyncError):
    """The user is already a member of the group."""

    def __init__(self, group_id: str, user_id: str):
        super().__init__(f"User {user_id} is already a member of group {group_id}")
        self.group_id = group_id
        self.user_id = user_id
