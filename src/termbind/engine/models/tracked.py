from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

from termbind.bindings.ir import Binding
from termbind.pattern.ir import InputElement

from ..events import KeyInput, MouseInput


class TrackedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    raw: Union[KeyInput, MouseInput]
    element: InputElement


class TrackedMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    binding: Binding
    length: int
