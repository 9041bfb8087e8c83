from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from termbind.bindings.ir import Binding
from termbind.pattern.ir import InputElement

from .models.outcome import Matched, NoMatch, Pending
from .models.state import MatchState
from .registry import ContextRegistry

logger = logging.getLogger(__name__)


class AmbiguityPolicy(str, Enum):
    """What to do when an exact match is also the prefix of a longer chord."""

    # keep waiting; the exact match wins only if the chord times out
    WAIT = "wait"
    # take the exact match immediately, longer chords become unreachable
    EAGER = "eager"


class ChordMatcher:
    """Advance a chord state machine one input element at a time.

    `step` never raises for unmatched input: it returns NoMatch, Pending or
    Matched. The caller owns time: it waits until `deadline` and then calls
    `on_timeout`.
    """

    def __init__(
        self,
        registry: ContextRegistry,
        *,
        timeout: float = 1.0,
        policy: AmbiguityPolicy = AmbiguityPolicy.WAIT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout < 0:
            raise ValueError(f"timeout must not be negative: {timeout}")
        self._registry = registry
        self._timeout = timeout
        self._policy = AmbiguityPolicy(policy)
        self._clock = clock
        self._state: Optional[MatchState] = None

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def policy(self) -> AmbiguityPolicy:
        return self._policy

    @property
    def state(self) -> Optional[MatchState]:
        return self._current_state()

    @property
    def pending(self) -> bool:
        return self._current_state() is not None

    @property
    def deadline(self) -> Optional[float]:
        """Clock time after which `on_timeout` should be called, if a chord is pending."""
        state = self._current_state()
        if state is None:
            return None
        return state.updated_at + self._timeout

    def expired(self, now: Optional[float] = None) -> bool:
        deadline = self.deadline
        if deadline is None:
            return False
        return (self._clock() if now is None else now) >= deadline

    def _current_state(self) -> Optional[MatchState]:
        """The pending chord, dropped first if the context stack changed under it."""
        state = self._state
        if state is not None and state.generation != self._registry.generation:
            logger.debug("context stack changed mid-chord; discarding %d elements", len(state.elements))
            state = self._state = None
        return state

    def cancel(self) -> None:
        if self._state is not None:
            logger.debug("chord cancelled after %d elements", len(self._state.elements))
        self._state = None

    def candidates(
        self, elements: Tuple[InputElement, ...], stack: Optional[Tuple[str, ...]] = None
    ) -> List[Binding]:
        """Bindings whose pattern starts with `elements`, in priority order."""
        return [
            binding
            for context in self._registry.active_contexts(stack)
            for binding in context.bindings
            if binding.pattern.has_prefix(elements)
        ]

    def step(self, element: InputElement) -> Union[NoMatch, Pending, Matched]:
        now = self._clock()
        state = self._current_state()
        if state is None:
            stack = self._registry.snapshot()
            elements: Tuple[InputElement, ...] = (element,)
        else:
            stack = state.stack
            elements = (*state.elements, element)

        candidates = self.candidates(elements, stack)
        if not candidates:
            self._state = None
            return NoMatch(elements=elements)

        exact = next((b for b in candidates if len(b.pattern) == len(elements)), None)
        longer = any(len(b.pattern) > len(elements) for b in candidates)

        if exact is not None and (not longer or self._policy is AmbiguityPolicy.EAGER):
            self._state = None
            return Matched(binding=exact, elements=elements)

        self._state = MatchState(
            elements=elements,
            started_at=now if state is None else state.started_at,
            updated_at=now,
            stack=stack,
            generation=self._registry.generation,
            fallback=exact if exact is not None else (state.fallback if state else None),
        )
        logger.debug("chord pending after %d elements (%d candidates)", len(elements), len(candidates))
        return Pending(elements=elements)

    def on_timeout(self) -> Union[NoMatch, Matched, None]:
        """Resolve a pending chord: to its fallback exact match, if any."""
        state = self._current_state()
        if state is None:
            return None
        self._state = None
        if state.fallback is None:
            logger.debug("chord timed out without an exact match")
            return NoMatch(elements=state.elements)
        logger.debug("chord timed out; falling back to %r", state.fallback.trigger)
        return Matched(
            binding=state.fallback,
            elements=state.elements[: len(state.fallback.pattern)],
        )
