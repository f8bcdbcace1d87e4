"""
Navigation handle over the value being validated.

A Context pairs the root value of a validation run with the path to the
value currently under inspection. It is immutable: every move returns a
new Context.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any

from .errors import StructuralError
from .types import Code, Err, Path, Step


@dataclass(frozen=True, slots=True)
class Context:
    """
    Immutable (root, path) pair.

    Usage:
        ctx = Context({"a": [10, 20]})
        ctx.child("a").child(1).value()     # 20
        ctx.child("a").child(1).fail("bad") # Err((("bad", ("a", 1)),))
    """

    root: Any
    path: Path = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    def value(self) -> Any:
        """Index the root by every step of the path."""
        return reduce(lambda node, step: node[step], self.path, self.root)

    def parent(self) -> Context:
        if not self.path:
            raise StructuralError(
                "Cannot fetch the parent of a context already at the root"
            )
        return self._move(self.path[:-1])

    def child(self, step: Step) -> Context:
        return self._move((*self.path, step))

    def sibling(self, step: Step) -> Context:
        return self._move((*self.path[:-1], step))

    def fail(self, code: Code) -> Err:
        """Reject with a single error anchored at the current path."""
        return Err(((code, self.path),))

    def _move(self, path: Path) -> Context:
        return Context(self.root, path)
