from __future__ import annotations

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from termbind.bindings.ir import Binding
from termbind.pattern.ir import InputElement


class NoMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["no_match"] = "no_match"
    elements: Tuple[InputElement, ...] = ()


class Pending(BaseModel):
    """A chord prefix matched; more input is awaited."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pending"] = "pending"
    elements: Tuple[InputElement, ...]


class Matched(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["matched"] = "matched"
    binding: Binding
    elements: Tuple[InputElement, ...]

    @property
    def action(self) -> Optional[str]:
        return self.binding.action


Outcome = Annotated[Union[NoMatch, Pending, Matched], Field(discriminator="kind")]
