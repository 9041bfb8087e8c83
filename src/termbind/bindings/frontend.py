from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from termbind.errors import (
    InvalidConfigError,
    InvalidTriggerError,
    ParseError,
    UndefinedContextError,
)
from termbind.pattern.dsl import parse_element, parse_pattern
from termbind.pattern.ir import InputElement

from .config import ContextualBindingsConfig, DocumentConfig
from .ir import Binding, BindingDocument, Context, KeyLabels

logger = logging.getLogger(__name__)


def _validate(model, tree: Any):
    try:
        return model.model_validate(tree)
    except ValidationError as exc:
        raise InvalidConfigError(f"invalid binding configuration: {exc}") from exc


def _build(cfg: ContextualBindingsConfig) -> Dict[str, Context]:
    contexts: Dict[str, Context] = {}
    for name, binding_cfgs in cfg.root.items():
        bindings: List[Binding] = []
        for binding_cfg in binding_cfgs:
            if binding_cfg.context is not None and binding_cfg.context not in cfg.root:
                raise UndefinedContextError(
                    binding_cfg.context, where=f"binding switch target in {name!r}"
                )
            for text in binding_cfg.triggers:
                try:
                    pattern = parse_pattern(text)
                except ParseError as exc:
                    raise InvalidTriggerError(name, text, exc) from exc
                bindings.append(
                    Binding(
                        context=name,
                        order=len(bindings),
                        pattern=pattern,
                        trigger=text,
                        action=binding_cfg.action,
                        label=binding_cfg.label,
                        hidden=binding_cfg.hidden,
                        next_context=binding_cfg.context,
                    )
                )
        contexts[name] = Context(id=name, bindings=tuple(bindings))
        logger.debug("built context %r with %d bindings", name, len(bindings))
    return contexts


def build_contexts(tree: Mapping[str, Any]) -> Dict[str, Context]:
    """Build contexts from `{context: [{action, triggers}, ...]}`.

    All or nothing: the first invalid trigger aborts the whole build.
    """
    return _build(_validate(ContextualBindingsConfig, tree))


def _build_labels(labels: Mapping[str, str]) -> KeyLabels:
    parsed: Dict[InputElement, str] = {}
    for text, label in labels.items():
        try:
            parsed[parse_element(text)] = label
        except ParseError as exc:
            raise InvalidTriggerError("labels", text, exc) from exc
    return KeyLabels(labels=parsed)


def load_document(tree: Mapping[str, Any]) -> BindingDocument:
    """Build a full binding document: setup, bindings and key labels."""

    cfg = _validate(DocumentConfig, tree)
    contexts = _build(cfg.bindings)
    if cfg.setup.context not in contexts:
        raise UndefinedContextError(cfg.setup.context, where="setup.context")

    return BindingDocument(
        initial_context=cfg.setup.context,
        setup_action=cfg.setup.action,
        contexts=contexts,
        labels=_build_labels(cfg.labels),
    )
