from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from termbind.bindings.ir import Binding
from termbind.pattern.ir import InputElement


class MatchState(BaseModel):
    """A partially matched chord.

    `stack` and `generation` capture the active contexts when the chord
    started; `fallback` is the best exact match seen so far, used on timeout.
    """

    model_config = ConfigDict(frozen=True)

    elements: Tuple[InputElement, ...]
    started_at: float
    updated_at: float
    stack: Tuple[str, ...]
    generation: int
    fallback: Optional[Binding] = None
