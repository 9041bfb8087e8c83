from __future__ import annotations

from .dsl import parse_element, parse_pattern
from .fmt import format_element, format_pattern, pad
from .ir import (
    InputElement,
    InputPattern,
    KeyToken,
    Modifier,
    MouseGesture,
    MouseToken,
    SpecialKey,
    Wildcard,
    WildcardToken,
)

__all__ = [
    "InputElement",
    "InputPattern",
    "KeyToken",
    "Modifier",
    "MouseGesture",
    "MouseToken",
    "SpecialKey",
    "Wildcard",
    "WildcardToken",
    "format_element",
    "format_pattern",
    "pad",
    "parse_element",
    "parse_pattern",
]
