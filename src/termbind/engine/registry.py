from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from termbind.bindings.ir import Context
from termbind.errors import EmptyStackError, UnknownContextError

logger = logging.getLogger(__name__)


class ContextRegistry:
    """Built contexts plus the stack of active ones (innermost last).

    The context map is fixed at construction; only the stack changes. Each
    change bumps `generation` so that chord matching can notice it.
    """

    def __init__(self, contexts: Mapping[str, Context], stack: Iterable[str] = ()) -> None:
        self._contexts: dict[str, Context] = dict(contexts)
        self._stack: List[str] = []
        self._generation = 0
        for name in stack:
            self.push(name)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def contexts(self) -> Mapping[str, Context]:
        return dict(self._contexts)

    def __contains__(self, name: object) -> bool:
        return name in self._contexts

    def __len__(self) -> int:
        return len(self._stack)

    def get(self, name: str) -> Optional[Context]:
        return self._contexts.get(name)

    def _require(self, name: str) -> str:
        if name not in self._contexts:
            raise UnknownContextError(name)
        return name

    def push(self, name: str) -> None:
        self._stack.append(self._require(name))
        self._changed("push", name)

    def pop(self) -> str:
        if not self._stack:
            raise EmptyStackError("cannot pop from an empty context stack")
        name = self._stack.pop()
        self._changed("pop", name)
        return name

    def replace_top(self, name: str) -> str:
        """Swap the innermost context for `name`; returns the replaced one."""
        self._require(name)
        if not self._stack:
            raise EmptyStackError("cannot replace the top of an empty context stack")
        previous = self._stack[-1]
        self._stack[-1] = name
        self._changed("replace_top", name)
        return previous

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._stack)

    def active_contexts(self, stack: Optional[Tuple[str, ...]] = None) -> Iterator[Context]:
        """Contexts of `stack` (default: the current one), innermost first, each once."""
        seen: set[str] = set()
        for name in reversed(stack if stack is not None else self._stack):
            if name in seen:
                continue
            seen.add(name)
            yield self._contexts[name]

    def _changed(self, op: str, name: str) -> None:
        self._generation += 1
        logger.debug("context stack %s %r -> %s", op, name, self._stack)
