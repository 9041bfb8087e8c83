from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from termbind.bindings.frontend import build_contexts, load_document
from termbind.bindings.ir import Context, KeyLabels
from termbind.pattern.fmt import format_pattern
from termbind.pattern.ir import InputElement, InputPattern

from .events import KeyInput, MouseInput, format_input, to_element
from .matcher import AmbiguityPolicy, ChordMatcher
from .models.outcome import Matched, NoMatch, Pending
from .models.tracked import TrackedEvent, TrackedMatch
from .registry import ContextRegistry
from .tracker import BindingTracker

logger = logging.getLogger(__name__)


class InputEngine:
    """Resolve terminal input into actions using a stack of binding contexts."""

    def __init__(
        self,
        contexts: Mapping[str, Context],
        *,
        stack: Iterable[str] = (),
        labels: Optional[KeyLabels] = None,
        setup_action: Optional[str] = None,
        timeout: float = 1.0,
        policy: AmbiguityPolicy = AmbiguityPolicy.WAIT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._registry = ContextRegistry(contexts, stack)
        self._matcher = ChordMatcher(self._registry, timeout=timeout, policy=policy, clock=clock)
        self._tracker = BindingTracker()
        self._labels = labels or KeyLabels()
        self.setup_action = setup_action

    @classmethod
    def from_config(cls, tree: Mapping[str, Any], **options: Any) -> "InputEngine":
        """Engine over a plain `{context: [bindings]}` tree; the stack starts empty."""
        return cls(build_contexts(tree), **options)

    @classmethod
    def from_document(cls, tree: Mapping[str, Any], **options: Any) -> "InputEngine":
        """Engine over a `{setup, bindings, labels}` document, starting in its setup context."""
        document = load_document(tree)
        return cls(
            document.contexts,
            stack=[document.initial_context],
            labels=document.labels,
            setup_action=document.setup_action,
            **options,
        )

    @property
    def registry(self) -> ContextRegistry:
        return self._registry

    @property
    def matcher(self) -> ChordMatcher:
        return self._matcher

    @property
    def pending(self) -> bool:
        return self._matcher.pending

    @property
    def deadline(self) -> Optional[float]:
        return self._matcher.deadline

    # -- context stack -----------------------------------------------------

    def push(self, name: str) -> None:
        self._registry.push(name)
        self._matcher.cancel()

    def pop(self) -> str:
        name = self._registry.pop()
        self._matcher.cancel()
        return name

    def replace_top(self, name: str) -> str:
        previous = self._registry.replace_top(name)
        self._matcher.cancel()
        return previous

    def snapshot(self) -> Tuple[str, ...]:
        return self._registry.snapshot()

    # -- matching ----------------------------------------------------------

    def step(self, event: Union[KeyInput, MouseInput]) -> Union[NoMatch, Pending, Matched]:
        element = to_element(event)
        self._tracker.record_event(event, element)
        outcome = self._matcher.step(element)
        if isinstance(outcome, Matched):
            self._on_matched(outcome)
        return outcome

    def on_timeout(self) -> Union[NoMatch, Matched, None]:
        outcome = self._matcher.on_timeout()
        if isinstance(outcome, Matched):
            self._on_matched(outcome)
        return outcome

    def poll(self, now: Optional[float] = None) -> Union[NoMatch, Matched, None]:
        """Call `on_timeout` if the pending chord's deadline has passed."""
        if self._matcher.expired(now):
            return self.on_timeout()
        return None

    def cancel(self) -> None:
        self._matcher.cancel()

    def _on_matched(self, outcome: Matched) -> None:
        binding = outcome.binding
        self._tracker.record_match(binding, len(outcome.elements))
        logger.debug("matched %r -> %r in context %r", binding.trigger, binding.action, binding.context)
        if binding.next_context is not None:
            if len(self._registry):
                self._registry.replace_top(binding.next_context)
            else:
                self._registry.push(binding.next_context)

    def last_event(self) -> Optional[TrackedEvent]:
        return self._tracker.last_event()

    def last_match(self) -> Optional[TrackedMatch]:
        return self._tracker.last_match()

    # -- display -----------------------------------------------------------

    def format(self, value: Union[InputPattern, InputElement, KeyInput, MouseInput]) -> str:
        if isinstance(value, (KeyInput, MouseInput)):
            return format_input(value, labels=self._labels.label_for)
        return format_pattern(value, labels=self._labels.label_for)

    def legend(self) -> List[Tuple[str, str]]:
        """(keys, label) entries for visible bindings of the active contexts, innermost first."""
        entries: Dict[Tuple[str, Optional[str], str], List[str]] = {}
        for context in self._registry.active_contexts():
            for binding in context.bindings:
                if binding.hidden:
                    continue
                label = binding.label or binding.target
                key = (context.id, binding.action, label)
                entries.setdefault(key, []).append(self.format(binding.pattern))
        return [(" / ".join(keys), label) for (_, _, label), keys in entries.items()]

