"""Formatting of patterns and inputs for legends and messages.

The output of `format_pattern` parses back to the same pattern, so it can be
written into configuration files as well as shown to users.
"""

from __future__ import annotations

from typing import Callable, Literal, Mapping, Optional, Union

from .ir import (
    SPECIAL_BY_CODE,
    InputElement,
    InputPattern,
    KeyToken,
    Modifier,
    MouseToken,
    is_control,
)

Align = Literal["left", "right", "center"]
LabelLookup = Union[Mapping[InputElement, str], Callable[[InputElement], Optional[str]]]


def _format_key(token: KeyToken) -> str:
    if token.special is not None:
        return f"<{token.special.value}>"
    if token.code is not None:
        return f"0x{token.code:x}"
    assert token.char is not None
    ch = token.char
    if ch.isspace() or is_control(ord(ch)):
        special = SPECIAL_BY_CODE.get(ord(ch))
        return f"<{special.value}>" if special is not None else f"0x{ord(ch):x}"
    return ch


def format_element(element: InputElement) -> str:
    prefix = ""
    if Modifier.META in element.modifiers:
        prefix += "M-"
    if Modifier.CTRL in element.modifiers:
        prefix += "C-"

    token = element.token
    if isinstance(token, KeyToken):
        return prefix + _format_key(token)
    if isinstance(token, MouseToken):
        return f"{prefix}<{token.gesture.value}>"
    return f"<{token.wildcard.value}>"


def _lookup(labels: Optional[LabelLookup], element: InputElement) -> Optional[str]:
    if labels is None:
        return None
    if callable(labels):
        return labels(element)
    return labels.get(element)


def format_pattern(
    pattern: Union[InputPattern, InputElement],
    *,
    labels: Optional[LabelLookup] = None,
) -> str:
    """Render a pattern (or a single element) as trigger text.

    `labels` (a mapping or a lookup function) replaces individual elements
    with display labels; the result is then meant for display only.
    """
    if isinstance(pattern, InputElement):
        elements = (pattern,)
    else:
        elements = pattern.elements
    parts = []
    for element in elements:
        label = _lookup(labels, element)
        parts.append(label if label is not None else format_element(element))
    return " ".join(parts)


def pad(text: str, width: int, fill: str = " ", align: Align = "left") -> str:
    """Pad `text` to `width` characters with `fill`.

    Width is a character count; terminal cell width is the renderer's concern.
    """
    if len(fill) != 1:
        raise ValueError(f"fill must be a single character: {fill!r}")
    missing = width - len(text)
    if missing <= 0:
        return text
    if align == "left":
        return text + fill * missing
    if align == "right":
        return fill * missing + text
    if align == "center":
        left = missing // 2
        return fill * left + text + fill * (missing - left)
    raise ValueError(f"unknown alignment: {align!r}")
