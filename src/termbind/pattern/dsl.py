from __future__ import annotations

import re
from typing import Dict, List, Union

from termbind.errors import (
    DuplicateModifierError,
    EmptyPatternError,
    InvalidHexError,
    MultiCharTokenError,
    UnknownNameError,
)

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
    is_control,
)


_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

_MODIFIER_PREFIXES = {f"{m.value}-": m for m in Modifier}

_NAMED_TOKENS: Dict[str, Union[KeyToken, MouseToken, WildcardToken]] = {
    **{k.value: KeyToken(special=k) for k in SpecialKey},
    **{g.value: MouseToken(gesture=g) for g in MouseGesture},
    **{w.value: WildcardToken(wildcard=w) for w in Wildcard},
    # spellings accepted for compatibility with older configurations
    "ESCAPE": KeyToken(special=SpecialKey.ESC),
    "LEFT_BUTTON_PRESS": MouseToken(gesture=MouseGesture.LEFTCLICK),
    "LEFT_BUTTON_RELEASE": MouseToken(gesture=MouseGesture.LEFTRELEASE),
    "RIGHT_BUTTON_PRESS": MouseToken(gesture=MouseGesture.RIGHTCLICK),
    "RIGHT_BUTTON_RELEASE": MouseToken(gesture=MouseGesture.RIGHTRELEASE),
    "MIDDLE_BUTTON_PRESS": MouseToken(gesture=MouseGesture.MIDDLECLICK),
    "MIDDLE_BUTTON_RELEASE": MouseToken(gesture=MouseGesture.MIDDLERELEASE),
    "WHEEL_UP": MouseToken(gesture=MouseGesture.SCROLLUP),
    "WHEEL_DOWN": MouseToken(gesture=MouseGesture.SCROLLDOWN),
}


def _split_modifiers(text: str) -> tuple[frozenset[Modifier], str]:
    modifiers: set[Modifier] = set()
    remaining = text
    # A bare prefix such as "C-" is left as the core token.
    while len(remaining) > 2 and remaining[:2] in _MODIFIER_PREFIXES:
        modifier = _MODIFIER_PREFIXES[remaining[:2]]
        if modifier in modifiers:
            raise DuplicateModifierError(
                f"modifier {modifier.value}- given twice: {text!r}", text=text
            )
        modifiers.add(modifier)
        remaining = remaining[2:]
    return frozenset(modifiers), remaining


def _parse_core(core: str, *, text: str) -> Union[KeyToken, MouseToken, WildcardToken]:
    if len(core) > 2 and core.startswith("<") and core.endswith(">"):
        token = _NAMED_TOKENS.get(core[1:-1])
        if token is None:
            raise UnknownNameError(f"unknown key name {core!r}", text=text)
        return token

    if core.startswith("0x"):
        if not _HEX_DIGITS.fullmatch(core[2:]):
            raise InvalidHexError(f"invalid hex notation: {core!r}", text=text)
        code = int(core[2:], 16)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise InvalidHexError(f"invalid Unicode code point: {core!r}", text=text)
        return KeyToken(code=code)

    if len(core) != 1:
        raise MultiCharTokenError(f"invalid key input format: {text!r}", text=text)
    if is_control(ord(core)):
        return KeyToken(code=ord(core))
    return KeyToken(char=core)


def parse_element(text: str) -> InputElement:
    """Parse one element such as `C-x`, `M-<UP>`, `0x7f` or `<LEFTCLICK>`."""

    modifiers, core = _split_modifiers(text)
    token = _parse_core(core, text=text)
    if modifiers and isinstance(token, WildcardToken):
        raise UnknownNameError(f"{core} does not take modifiers: {text!r}", text=text)
    return InputElement(token=token, modifiers=modifiers)


def parse_pattern(text: str) -> InputPattern:
    """Parse a trigger text into an InputPattern; whitespace separates chord steps."""

    parts: List[str] = text.split()
    if not parts:
        raise EmptyPatternError("pattern is empty", text=text)
    return InputPattern(elements=tuple(parse_element(part) for part in parts))
