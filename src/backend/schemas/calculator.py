"""
Calculator request/response schemas.

Numbers that may be non-finite are returned as display strings
("Infinity", "-Infinity", "NaN"), since JSON has no literal for them.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CalculatorRequest(BaseModel):
    """A keystroke sequence to run through a fresh calculator session."""

    keys: list[str] = Field(..., max_length=1000)
    memory: float = 0.0


class CalculatorState(BaseModel):
    """Snapshot of a calculator session after the last keystroke."""

    display: str
    accumulator: Optional[str] = None
    pending_operation: Optional[str] = None
    awaiting_new_operand: bool = False
    memory: str = "0"
    history: list[str] = Field(default_factory=list)
