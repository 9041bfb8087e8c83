"""Context-aware key and mouse binding resolution for terminal applications."""

from __future__ import annotations

from .bindings import Binding, BindingDocument, Context, KeyLabels, build_contexts, load_document
from .engine import (
    AmbiguityPolicy,
    InputEngine,
    KeyInput,
    Matched,
    MouseInput,
    NoMatch,
    Pending,
)
from .pattern import InputElement, InputPattern, format_pattern, pad, parse_pattern

__all__ = [
    "AmbiguityPolicy",
    "Binding",
    "BindingDocument",
    "Context",
    "InputElement",
    "InputEngine",
    "InputPattern",
    "KeyInput",
    "KeyLabels",
    "Matched",
    "MouseInput",
    "NoMatch",
    "Pending",
    "build_contexts",
    "format_pattern",
    "load_document",
    "pad",
    "parse_pattern",
]
