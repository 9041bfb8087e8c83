from __future__ import annotations

from .outcome import Matched, NoMatch, Outcome, Pending
from .state import MatchState
from .tracked import TrackedEvent, TrackedMatch

__all__ = [
    "MatchState",
    "Matched",
    "NoMatch",
    "Outcome",
    "Pending",
    "TrackedEvent",
    "TrackedMatch",
]
