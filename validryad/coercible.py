"""
Pydantic-backed coercible types for use with Typed().

Any object with a `name` and a `try_coerce(value)` method can be used as a
type; PydanticType adapts any annotation pydantic understands (builtins,
Decimal, datetime, Literal, BaseModel subclasses, ...).
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, field
from typing import Any

from pydantic import ConfigDict, TypeAdapter, ValidationError

from .config import is_strict
from .types import Err, Ok


@dataclass(frozen=True, slots=True)
class PydanticType:
    """
    Coercible type validated through a pydantic TypeAdapter.

    Args:
        annotation: Any type pydantic can validate
        strict: True refuses coercion, False allows it, None defers to
               validation_context() at call time
        name: Display name used in ("expected_type", name) errors
        config: Optional pydantic ConfigDict for the adapter

    Usage:
        Age = PydanticType(int, strict=False, name="Age")
        Age.try_coerce("42")    # Ok(42)
        Age.try_coerce("old")   # Err(...)
    """

    annotation: Any
    strict: bool | None = None
    name: str = ""
    config: ConfigDict | None = field(default=None, repr=False, compare=False)
    adapter: TypeAdapter = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(
                self, "name", getattr(self.annotation, "__name__", repr(self.annotation))
            )
        object.__setattr__(self, "adapter", TypeAdapter(self.annotation, config=self.config))

    def try_coerce(self, value: Any) -> Ok[Any] | Err:
        strict = is_strict() if self.strict is None else self.strict
        try:
            return Ok(self.adapter.validate_python(value, strict=strict))
        except ValidationError as e:
            return Err(tuple((error["type"], tuple(error["loc"])) for error in e.errors()))


def strict(annotation: Any, name: str | None = None) -> PydanticType:
    """Type that only accepts values already of the right type."""
    return PydanticType(annotation, strict=True, name=name or "")


def coercible(annotation: Any, name: str | None = None, config: ConfigDict | None = None) -> PydanticType:
    """Type that converts compatible values (e.g. "1" -> 1)."""
    return PydanticType(annotation, strict=False, name=name or "", config=config)


# Strict types
Integer = strict(int, "Integer")
Float = strict(float, "Float")
String = strict(str, "String")
Boolean = strict(bool, "Boolean")
Decimal = strict(decimal.Decimal, "Decimal")

# Coercible types
CoercibleInteger = coercible(int, "Integer")
CoercibleFloat = coercible(float, "Float")
CoercibleString = coercible(str, "String", ConfigDict(coerce_numbers_to_str=True))
CoercibleBoolean = coercible(bool, "Boolean")
CoercibleDecimal = coercible(decimal.Decimal, "Decimal")
