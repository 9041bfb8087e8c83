from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from termbind.pattern.fmt import LabelLookup, format_pattern
from termbind.pattern.ir import (
    InputElement,
    KeyToken,
    Modifier,
    MouseGesture,
    MouseToken,
    SpecialKey,
    is_control,
)


class KeyInput(BaseModel):
    """A decoded key press as delivered by the terminal layer."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["key"] = "key"
    code: Union[SpecialKey, str]
    ctrl: bool = False
    alt: bool = False


class MouseInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["mouse"] = "mouse"
    gesture: MouseGesture
    row: int = 0
    col: int = 0
    ctrl: bool = False
    alt: bool = False


RawInputEvent = Annotated[Union[KeyInput, MouseInput], Field(discriminator="kind")]


def _modifiers(event: Union[KeyInput, MouseInput]) -> frozenset[Modifier]:
    modifiers = set()
    if event.ctrl:
        modifiers.add(Modifier.CTRL)
    if event.alt:
        modifiers.add(Modifier.META)
    return frozenset(modifiers)


def to_element(event: Union[KeyInput, MouseInput]) -> InputElement:
    """Canonical element for a live event; control characters become raw codes."""

    if isinstance(event, MouseInput):
        return InputElement(token=MouseToken(gesture=event.gesture), modifiers=_modifiers(event))

    code = event.code
    if isinstance(code, SpecialKey):
        token = KeyToken(special=code)
    elif len(code) != 1:
        raise ValueError(f"key input must be a single character: {code!r}")
    elif is_control(ord(code)):
        token = KeyToken(code=ord(code))
    else:
        token = KeyToken(char=code)
    return InputElement(token=token, modifiers=_modifiers(event))


def format_input(
    event: Union[KeyInput, MouseInput],
    *,
    labels: Optional[LabelLookup] = None,
) -> str:
    return format_pattern(to_element(event), labels=labels)
