from __future__ import annotations

from .config import BindingConfig, ContextualBindingsConfig, DocumentConfig, SetupConfig
from .frontend import build_contexts, load_document
from .ir import Binding, BindingDocument, Context, KeyLabels, format_binding

__all__ = [
    "Binding",
    "BindingConfig",
    "BindingDocument",
    "Context",
    "ContextualBindingsConfig",
    "DocumentConfig",
    "KeyLabels",
    "SetupConfig",
    "build_contexts",
    "format_binding",
    "load_document",
]
