from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from termbind.bindings.frontend import load_document
from termbind.bindings.ir import BindingDocument, format_binding
from termbind.errors import BuildError
from termbind.pattern.fmt import format_pattern

logger = logging.getLogger(__name__)


def load_file(path: str | Path) -> Dict[str, Any]:
    """Load a bindings document from a `.toml` or `.json` file into a dict."""

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".toml":
        return tomllib.loads(text)
    return json.loads(text)


def print_document(document: BindingDocument, *, context: Optional[str] = None, out: TextIO) -> None:
    names = [context] if context is not None else list(document.contexts)
    for name in names:
        ctx = document.contexts[name]
        marker = " (initial)" if name == document.initial_context else ""
        out.write(f"[{name}]{marker}\n")
        width = max((len(format_pattern(b.pattern)) for b in ctx.bindings), default=0)
        for binding in ctx.bindings:
            out.write(f"  {format_binding(binding, width=width)}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check a key binding file and print its binding table."
    )
    parser.add_argument("config", help="Bindings document path (.json or .toml)")
    parser.add_argument("--context", help="Only print this context")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        tree = load_file(args.config)
    except (OSError, ValueError) as exc:
        logger.debug("failed to load %s", args.config, exc_info=True)
        print(f"error: cannot load {args.config}: {exc}", file=sys.stderr)
        return 1

    try:
        document = load_document(tree)
    except BuildError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.context is not None and args.context not in document.contexts:
        print(f"error: unknown context {args.context!r}", file=sys.stderr)
        return 1

    print_document(document, context=args.context, out=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
