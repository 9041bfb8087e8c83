from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Modifier(str, Enum):
    """Keyboard modifiers; mouse events carry the same set."""

    CTRL = "C"
    META = "M"


class SpecialKey(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    ENTER = "ENTER"
    ESC = "ESC"
    BACKSPACE = "BACKSPACE"
    TAB = "TAB"
    BACKTAB = "BACKTAB"
    DELETE = "DELETE"
    INSERT = "INSERT"
    HOME = "HOME"
    END = "END"
    PAGEUP = "PAGEUP"
    PAGEDOWN = "PAGEDOWN"
    SPACE = "SPACE"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"

    @property
    def code(self) -> Optional[int]:
        """Code point the terminal sends for this key, if it is a single one."""
        return _SPECIAL_CODES.get(self)


_SPECIAL_CODES = {
    SpecialKey.TAB: 0x09,
    SpecialKey.ENTER: 0x0D,
    SpecialKey.ESC: 0x1B,
    SpecialKey.SPACE: 0x20,
    SpecialKey.BACKSPACE: 0x7F,
}

SPECIAL_BY_CODE = {code: key for key, code in _SPECIAL_CODES.items()}


class MouseGesture(str, Enum):
    LEFTCLICK = "LEFTCLICK"
    LEFTRELEASE = "LEFTRELEASE"
    RIGHTCLICK = "RIGHTCLICK"
    RIGHTRELEASE = "RIGHTRELEASE"
    MIDDLECLICK = "MIDDLECLICK"
    MIDDLERELEASE = "MIDDLERELEASE"
    DRAG = "DRAG"
    SCROLLUP = "SCROLLUP"
    SCROLLDOWN = "SCROLLDOWN"


class Wildcard(str, Enum):
    """Pattern-only tokens that match a class of key events."""

    PRINTABLE_KEY = "PRINTABLE_KEY"
    ANY_KEY = "ANY_KEY"


def is_control(code: int) -> bool:
    return unicodedata.category(chr(code)) == "Cc"


class KeyToken(BaseModel):
    """A key: exactly one of a character, a named special key or a raw code point."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["key"] = "key"
    char: Optional[str] = None
    special: Optional[SpecialKey] = None
    code: Optional[int] = None

    @model_validator(mode="after")
    def _exactly_one_form(self) -> "KeyToken":
        forms = [f for f in (self.char, self.special, self.code) if f is not None]
        if len(forms) != 1:
            raise ValueError("key token needs exactly one of char, special or code")
        if self.char is not None and len(self.char) != 1:
            raise ValueError(f"key char must be a single character: {self.char!r}")
        if self.code is not None:
            if not 0 <= self.code <= 0x10FFFF or 0xD800 <= self.code <= 0xDFFF:
                raise ValueError(f"invalid code point: 0x{self.code:x}")
        return self

    def identity(self) -> Union[int, SpecialKey]:
        """Key identity used for matching: the code point when one exists."""
        if self.char is not None:
            return ord(self.char)
        if self.code is not None:
            return self.code
        assert self.special is not None
        code = self.special.code
        return self.special if code is None else code


class MouseToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["mouse"] = "mouse"
    gesture: MouseGesture


class WildcardToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["wildcard"] = "wildcard"
    wildcard: Wildcard


Token = Annotated[Union[KeyToken, MouseToken, WildcardToken], Field(discriminator="kind")]


class InputElement(BaseModel):
    """One step of a pattern, e.g. `C-x` is Ctrl + character `x`."""

    model_config = ConfigDict(frozen=True)

    token: Token
    modifiers: frozenset[Modifier] = frozenset()

    @property
    def ctrl(self) -> bool:
        return Modifier.CTRL in self.modifiers

    @property
    def meta(self) -> bool:
        return Modifier.META in self.modifiers

    def matches(self, other: "InputElement") -> bool:
        """Whether `other` (a concrete input) satisfies this pattern element."""
        token = self.token
        if isinstance(token, WildcardToken):
            if not isinstance(other.token, KeyToken):
                return False
            if token.wildcard is Wildcard.ANY_KEY:
                return True
            code = other.token.identity()
            return not other.modifiers and isinstance(code, int) and not is_control(code)
        if self.modifiers != other.modifiers:
            return False
        if isinstance(token, MouseToken):
            return isinstance(other.token, MouseToken) and token.gesture is other.token.gesture
        return isinstance(other.token, KeyToken) and token.identity() == other.token.identity()


class InputPattern(BaseModel):
    """Ordered, non-empty sequence of elements; more than one makes a chord."""

    model_config = ConfigDict(frozen=True)

    elements: Tuple[InputElement, ...] = Field(min_length=1)

    def __len__(self) -> int:
        return len(self.elements)

    def has_prefix(self, inputs: Tuple[InputElement, ...]) -> bool:
        if len(inputs) > len(self.elements):
            return False
        return all(p.matches(i) for p, i in zip(self.elements, inputs))
