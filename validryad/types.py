"""
Type definitions for validryad.

Provides the Result type (Ok/Err), path and error aliases, and the
protocol that external coercible types implement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterable, Protocol, TypeVar

from .errors import UnwrapError

T = TypeVar("T")
U = TypeVar("U")

# Type aliases
Step = Hashable
Path = tuple[Step, ...]
Code = Any
ErrorEntry = tuple[Code, Path]
ErrorEntries = tuple[ErrorEntry, ...]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Accepted result containing the (possibly transformed) value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def bind(self, fn: Callable[[T], Result]) -> Result:
        return fn(self.value)

    def either(self, on_ok: Callable[[T], Any], on_err: Callable[[ErrorEntries], Any]) -> Any:
        return on_ok(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """
    Rejected result carrying every violation found.

    Each entry is a (code, path) pair, in the order the checks ran.
    """

    errors: ErrorEntries

    def __post_init__(self) -> None:
        errors = tuple(self.errors)
        if not errors:
            raise ValueError("Err requires at least one error entry")
        object.__setattr__(self, "errors", errors)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err:
        return self

    def bind(self, fn: Callable[[Any], Result]) -> Err:
        return self

    def either(self, on_ok: Callable[[Any], Any], on_err: Callable[[ErrorEntries], Any]) -> Any:
        return on_err(self.errors)

    def unwrap(self) -> Any:
        raise UnwrapError(f"Called unwrap() on a rejected result: {self.errors!r}")

    def __add__(self, other: Err) -> Err:
        """Concatenate errors, keeping this result's errors first."""
        if not isinstance(other, Err):
            return NotImplemented
        return Err(self.errors + other.errors)


Result = Ok[Any] | Err


def combine(results: Iterable[Result]) -> Ok[list[Any]] | Err:
    """
    Merge results without short-circuiting.

    Returns Ok with every value if all results accepted, otherwise an Err
    holding the errors of every rejected result in order.
    """
    values: list[Any] = []
    errors: list[ErrorEntry] = []

    for result in results:
        if isinstance(result, Err):
            errors.extend(result.errors)
        else:
            values.append(result.value)

    return Err(tuple(errors)) if errors else Ok(values)


class CoercibleType(Protocol):
    """
    An external type that can check and coerce a value.

    `try_coerce` returns Ok with the coerced value or Err on failure; the
    Err contents are ignored and replaced by an expected_type error naming
    `name`.
    """

    name: str

    def try_coerce(self, value: Any) -> Ok[Any] | Err:
        ...
