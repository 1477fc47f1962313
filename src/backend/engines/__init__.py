"""Pure computation engines (no I/O)."""

from engines.calculator import BinaryOperator, Calculator, ScientificFunction
from engines.poll_tally import PollTally, can_vote, submit_vote, tally, viewer_vote

__all__ = [
    "BinaryOperator",
    "Calculator",
    "ScientificFunction",
    "PollTally",
    "can_vote",
    "submit_vote",
    "tally",
    "viewer_vote",
]
