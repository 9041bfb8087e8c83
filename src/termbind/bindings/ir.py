from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from termbind.pattern.fmt import format_pattern, pad
from termbind.pattern.ir import InputElement, InputPattern


class Binding(BaseModel):
    """A parsed trigger bound to an action within one context.

    `order` is the position among all triggers of the context and breaks ties
    between bindings with the same pattern.
    """

    model_config = ConfigDict(frozen=True)

    context: str
    order: int
    pattern: InputPattern
    trigger: str
    action: Optional[str] = None
    label: Optional[str] = None
    hidden: bool = False
    next_context: Optional[str] = None

    @property
    def target(self) -> str:
        """What the binding does, e.g. `save`, `-> insert` or `quit -> normal`."""
        if self.next_context is None:
            return self.action or ""
        return f"{self.action or ''} -> {self.next_context}".lstrip()


class Context(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    bindings: Tuple[Binding, ...] = ()


class KeyLabels(BaseModel):
    """Display labels for individual elements, e.g. `<UP>` shown as an arrow."""

    model_config = ConfigDict(frozen=True)

    labels: Dict[InputElement, str] = {}

    def label_for(self, element: InputElement) -> Optional[str]:
        """Label of `element`, or of a labelled element matching the same key.

        A label declared for `<ESC>` also applies to `0x1b` and to a raw escape.
        """
        label = self.labels.get(element)
        if label is not None:
            return label
        for labelled, label in self.labels.items():
            if labelled.matches(element):
                return label
        return None


def format_binding(binding: Binding, labels: Optional[KeyLabels] = None, *, width: int = 0) -> str:
    """One `keys  target` line; `width` pads the keys column."""
    keys = format_pattern(binding.pattern, labels=labels.label_for if labels else None)
    return f"{pad(keys, width)}  {binding.target}"


class BindingDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial_context: str
    setup_action: Optional[str] = None
    contexts: Dict[str, Context]
    labels: KeyLabels = KeyLabels()
