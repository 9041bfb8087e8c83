from __future__ import annotations

import itertools
from typing import Optional, Union

from termbind.bindings.ir import Binding
from termbind.pattern.ir import InputElement

from .events import KeyInput, MouseInput
from .models.tracked import TrackedEvent, TrackedMatch


class BindingTracker:
    """Remember the last input and the last match.

    Events draw ids from one counter; a match is stamped with the id of the
    event that completed it, so `last_match.id <= last_event.id` always holds.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._last_event: Optional[TrackedEvent] = None
        self._last_match: Optional[TrackedMatch] = None

    def record_event(self, raw: Union[KeyInput, MouseInput], element: InputElement) -> TrackedEvent:
        self._last_event = TrackedEvent(id=next(self._ids), raw=raw, element=element)
        return self._last_event

    def record_match(self, binding: Binding, length: int) -> TrackedMatch:
        if self._last_event is None:
            raise RuntimeError("a match cannot be recorded before any event")
        self._last_match = TrackedMatch(id=self._last_event.id, binding=binding, length=length)
        return self._last_match

    def last_event(self) -> Optional[TrackedEvent]:
        return self._last_event

    def last_match(self) -> Optional[TrackedMatch]:
        return self._last_match
