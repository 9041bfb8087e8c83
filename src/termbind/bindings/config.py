from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator


class BindingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: Optional[str] = None
    triggers: List[str] = Field(default_factory=list)
    label: Optional[str] = None
    hidden: bool = False
    context: Optional[str] = None

    @model_validator(mode="after")
    def _has_effect(self) -> "BindingConfig":
        if self.action is None and self.context is None:
            raise ValueError("binding needs an action or a context to switch to")
        return self


class ContextualBindingsConfig(RootModel[Dict[str, List[BindingConfig]]]):
    """Context name -> bindings, in declaration order."""


class SetupConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    context: str
    action: Optional[str] = None


class DocumentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    setup: SetupConfig
    bindings: ContextualBindingsConfig
    labels: Dict[str, str] = Field(default_factory=dict)
