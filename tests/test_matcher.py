from __future__ import annotations

from typing import Any

from termbind.bindings.frontend import build_contexts
from termbind.engine.matcher import AmbiguityPolicy, ChordMatcher
from termbind.engine.models import Matched, NoMatch, Pending
from termbind.engine.registry import ContextRegistry
from termbind.pattern.dsl import parse_element


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _matcher(config: dict[str, Any], *stack: str, **options: Any) -> ChordMatcher:
    registry = ContextRegistry(build_contexts(config), stack or tuple(config))
    return ChordMatcher(registry, **options)


def _feed(matcher: ChordMatcher, *texts: str) -> list:
    return [matcher.step(parse_element(text)) for text in texts]


def _action(outcome) -> str | None:
    assert isinstance(outcome, Matched), outcome
    return outcome.action


_CHORDS = {
    "main": [
        {"action": "X", "triggers": ["a"]},
        {"action": "Y", "triggers": ["a b"]},
        {"action": "save", "triggers": ["C-x C-s"]},
        {"action": "quit", "triggers": ["C-x C-c"]},
        {"action": "deep", "triggers": ["g g g"]},
    ]
}


def test_single_element_match() -> None:
    matcher = _matcher({"main": [{"action": "quit", "triggers": ["q"]}]})

    outcome = matcher.step(parse_element("q"))

    assert _action(outcome) == "quit"
    assert outcome.elements == (parse_element("q"),)
    assert not matcher.pending


def test_no_match() -> None:
    matcher = _matcher({"main": [{"action": "quit", "triggers": ["q"]}]})

    outcome = matcher.step(parse_element("z"))

    assert isinstance(outcome, NoMatch)
    assert not matcher.pending


def test_modifiers_must_match_exactly() -> None:
    matcher = _matcher({"main": [{"action": "copy", "triggers": ["C-c"]}]})

    assert isinstance(matcher.step(parse_element("c")), NoMatch)
    assert isinstance(matcher.step(parse_element("M-C-c")), NoMatch)
    assert _action(matcher.step(parse_element("C-c"))) == "copy"


def test_prefix_is_pending_until_complete() -> None:
    matcher = _matcher(_CHORDS)

    first, second, third = _feed(matcher, "g", "g", "g")

    assert isinstance(first, Pending)
    assert isinstance(second, Pending)
    assert second.elements == (parse_element("g"), parse_element("g"))
    assert _action(third) == "deep"
    assert not matcher.pending


def test_chord_branches() -> None:
    matcher = _matcher(_CHORDS)

    assert isinstance(matcher.step(parse_element("C-x")), Pending)
    assert _action(matcher.step(parse_element("C-c"))) == "quit"

    assert isinstance(matcher.step(parse_element("C-x")), Pending)
    assert _action(matcher.step(parse_element("C-s"))) == "save"


def test_mismatch_discards_chord_without_retry() -> None:
    matcher = _matcher(_CHORDS)

    pending, miss = _feed(matcher, "C-x", "a")

    assert isinstance(pending, Pending)
    # "a" alone would match, but the chord is dropped as a whole
    assert isinstance(miss, NoMatch)
    assert miss.elements == (parse_element("C-x"), parse_element("a"))
    assert not matcher.pending
    assert isinstance(matcher.step(parse_element("a")), Pending)


def test_timeout_falls_back_to_exact_match() -> None:
    matcher = _matcher(_CHORDS)

    assert isinstance(matcher.step(parse_element("a")), Pending)
    outcome = matcher.on_timeout()

    assert _action(outcome) == "X"
    assert outcome.elements == (parse_element("a"),)
    assert not matcher.pending


def test_longer_chord_within_window() -> None:
    matcher = _matcher(_CHORDS)

    _, outcome = _feed(matcher, "a", "b")

    assert _action(outcome) == "Y"
    assert matcher.on_timeout() is None


def test_wrong_continuation_is_no_match() -> None:
    matcher = _matcher(_CHORDS)

    _, outcome = _feed(matcher, "a", "c")

    assert isinstance(outcome, NoMatch)
    assert matcher.on_timeout() is None


def test_timeout_without_exact_match() -> None:
    matcher = _matcher(_CHORDS)

    _feed(matcher, "C-x")
    outcome = matcher.on_timeout()

    assert isinstance(outcome, NoMatch)
    assert outcome.elements == (parse_element("C-x"),)


def test_timeout_keeps_shorter_fallback() -> None:
    matcher = _matcher({"main": [{"action": "one", "triggers": ["a"]}, {"action": "three", "triggers": ["a b c"]}]})

    _feed(matcher, "a", "b")
    outcome = matcher.on_timeout()

    assert _action(outcome) == "one"
    assert outcome.elements == (parse_element("a"),)


def test_eager_policy_resolves_immediately() -> None:
    matcher = _matcher(_CHORDS, policy=AmbiguityPolicy.EAGER)

    assert _action(matcher.step(parse_element("a"))) == "X"
    assert isinstance(matcher.step(parse_element("b")), NoMatch)
    # chords without an exact prefix match still wait
    assert isinstance(matcher.step(parse_element("g")), Pending)


def test_inner_context_shadows_outer() -> None:
    config = {
        "outer": [{"action": "outer-copy", "triggers": ["C-c"]}],
        "inner": [{"action": "inner-copy", "triggers": ["C-c"]}],
    }
    matcher = _matcher(config, "outer", "inner")

    assert _action(matcher.step(parse_element("C-c"))) == "inner-copy"


def test_outer_context_still_reachable() -> None:
    config = {
        "outer": [{"action": "quit", "triggers": ["q"]}],
        "inner": [{"action": "copy", "triggers": ["y"]}],
    }
    matcher = _matcher(config, "outer", "inner")

    assert _action(matcher.step(parse_element("q"))) == "quit"


def test_first_registered_wins_within_context() -> None:
    matcher = _matcher(
        {"main": [{"action": "first", "triggers": ["a"]}, {"action": "second", "triggers": ["a"]}]}
    )

    outcome = matcher.step(parse_element("a"))

    assert _action(outcome) == "first"
    assert outcome.binding.order == 0


def test_inner_exact_match_waits_for_outer_chord() -> None:
    config = {
        "outer": [{"action": "outer-chord", "triggers": ["d d"]}],
        "inner": [{"action": "inner-d", "triggers": ["d"]}],
    }
    matcher = _matcher(config, "outer", "inner")

    assert isinstance(matcher.step(parse_element("d")), Pending)
    assert _action(matcher.on_timeout()) == "inner-d"
    assert isinstance(matcher.step(parse_element("d")), Pending)
    assert _action(matcher.step(parse_element("d"))) == "outer-chord"


def test_hex_and_special_key_are_equivalent() -> None:
    matcher = _matcher({"main": [{"action": "close", "triggers": ["<ESC>"]}, {"action": "erase", "triggers": ["0x7f"]}]})

    assert _action(matcher.step(parse_element("0x1b"))) == "close"
    assert _action(matcher.step(parse_element("<BACKSPACE>"))) == "erase"


def test_wildcards() -> None:
    matcher = _matcher(
        {
            "main": [
                {"action": "quit", "triggers": ["C-q"]},
                {"action": "insert", "triggers": ["<PRINTABLE_KEY>"]},
                {"action": "other", "triggers": ["<ANY_KEY>"]},
            ]
        }
    )

    assert _action(matcher.step(parse_element("x"))) == "insert"
    assert _action(matcher.step(parse_element("<SPACE>"))) == "insert"
    assert _action(matcher.step(parse_element("C-q"))) == "quit"
    assert _action(matcher.step(parse_element("C-w"))) == "other"
    assert _action(matcher.step(parse_element("<UP>"))) == "other"
    assert _action(matcher.step(parse_element("0x1b"))) == "other"
    assert isinstance(matcher.step(parse_element("<LEFTCLICK>")), NoMatch)


def test_wildcard_inside_chord() -> None:
    matcher = _matcher({"main": [{"action": "replace", "triggers": ["r <PRINTABLE_KEY>"]}]})

    assert isinstance(matcher.step(parse_element("r")), Pending)
    outcome = matcher.step(parse_element("z"))

    assert _action(outcome) == "replace"
    assert outcome.elements[-1] == parse_element("z")


def test_mouse_bindings() -> None:
    matcher = _matcher(
        {
            "main": [
                {"action": "select", "triggers": ["<LEFTCLICK>"]},
                {"action": "extend", "triggers": ["C-<LEFTCLICK>"]},
                {"action": "scroll", "triggers": ["<SCROLLDOWN>"]},
            ]
        }
    )

    assert _action(matcher.step(parse_element("<LEFTCLICK>"))) == "select"
    assert _action(matcher.step(parse_element("C-<LEFTCLICK>"))) == "extend"
    assert _action(matcher.step(parse_element("<WHEEL_DOWN>"))) == "scroll"
    assert isinstance(matcher.step(parse_element("<DRAG>")), NoMatch)


def test_stack_change_discards_pending_chord() -> None:
    config = {
        "main": [{"action": "save", "triggers": ["C-x C-s"]}],
        "other": [{"action": "stay", "triggers": ["C-s"]}],
    }
    registry = ContextRegistry(build_contexts(config), ["main"])
    matcher = ChordMatcher(registry)

    assert isinstance(matcher.step(parse_element("C-x")), Pending)
    registry.push("other")
    outcome = matcher.step(parse_element("C-s"))

    assert _action(outcome) == "stay"


def test_chord_uses_stack_captured_at_start() -> None:
    config = {"main": [{"action": "save", "triggers": ["C-x C-s"]}]}
    registry = ContextRegistry(build_contexts(config), ["main"])
    matcher = ChordMatcher(registry)

    matcher.step(parse_element("C-x"))

    assert matcher.state is not None
    assert matcher.state.stack == ("main",)
    assert matcher.state.generation == registry.generation


def test_cancel() -> None:
    matcher = _matcher(_CHORDS)

    matcher.step(parse_element("C-x"))
    matcher.cancel()

    assert not matcher.pending
    assert matcher.on_timeout() is None
    assert isinstance(matcher.step(parse_element("C-s")), NoMatch)


def test_deadline_follows_last_input() -> None:
    clock = _Clock()
    matcher = _matcher(_CHORDS, timeout=0.5, clock=clock)

    assert matcher.deadline is None
    matcher.step(parse_element("g"))
    assert matcher.deadline == 100.5

    clock.now = 100.25
    matcher.step(parse_element("g"))
    assert matcher.deadline == 100.75
    assert matcher.state is not None
    assert matcher.state.started_at == 100.0

    assert not matcher.expired()
    clock.now = 100.75
    assert matcher.expired()
    assert not matcher.expired(now=100.0)


def test_empty_stack_never_matches() -> None:
    registry = ContextRegistry(build_contexts(_CHORDS))
    matcher = ChordMatcher(registry)

    assert isinstance(matcher.step(parse_element("a")), NoMatch)


def test_stack_change_drops_chord_before_timeout() -> None:
    config = {
        "main": [{"action": "X", "triggers": ["a"]}, {"action": "Y", "triggers": ["a b"]}],
        "other": [],
    }
    registry = ContextRegistry(build_contexts(config), ["main"])
    matcher = ChordMatcher(registry)

    assert isinstance(matcher.step(parse_element("a")), Pending)
    registry.replace_top("other")

    assert not matcher.pending
    assert matcher.deadline is None
    assert matcher.state is None
    assert matcher.on_timeout() is None
