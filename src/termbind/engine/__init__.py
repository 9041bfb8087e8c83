from __future__ import annotations

from .engine import InputEngine
from .events import KeyInput, MouseInput, RawInputEvent, format_input, to_element
from .matcher import AmbiguityPolicy, ChordMatcher
from .models import MatchState, Matched, NoMatch, Outcome, Pending, TrackedEvent, TrackedMatch
from .registry import ContextRegistry
from .tracker import BindingTracker

__all__ = [
    "AmbiguityPolicy",
    "BindingTracker",
    "ChordMatcher",
    "ContextRegistry",
    "InputEngine",
    "KeyInput",
    "MatchState",
    "Matched",
    "MouseInput",
    "NoMatch",
    "Outcome",
    "Pending",
    "RawInputEvent",
    "TrackedEvent",
    "TrackedMatch",
    "format_input",
    "to_element",
]
