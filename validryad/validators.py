"""
Built-in validators for validryad.

Provides factory functions that return V instances.
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from typing import Any, Callable, Container, Mapping

from .coercible import PydanticType
from .core import (
    PASS,
    AndV,
    ArrayV,
    DefaultV,
    HashV,
    ImpliesV,
    OtherKeys,
    RuleV,
    ThenV,
    TupleV,
    TypedV,
    V,
    is_coercible_type,
    to_validator,
)
from .errors import ConstructionError
from .types import Code

logger = logging.getLogger(__name__)


def Pass() -> V:
    """Accept any value unchanged."""
    return PASS


def Default(value: Any) -> V:
    """
    Replace a missing (None) value with `value`.

    Falsey values that are present are kept:
        Default(True)(False)    # Ok(False)
    """
    return DefaultV(value)


def Typed(t: Any) -> V:
    """
    Check (and possibly coerce) a value against a type.

    Usage:
        Typed(Integer)          # strict int, named "Integer"
        Typed(CoercibleInteger) # "42" -> 42
        Typed(int)              # pydantic int, strictness from validation_context()
    """
    if is_coercible_type(t):
        return TypedV(t)
    if isinstance(t, type):
        return TypedV(PydanticType(t))
    raise ConstructionError(
        f"Typed() requires a class or an object with name and try_coerce; given: {t!r}"
    )


def Rule(code: Code, predicate: Callable[..., Any]) -> V:
    """
    Create validator from a predicate function.

    The predicate may take no arguments, the value, or the value and the
    Context it was found at:

        Rule("not_even", lambda x: x % 2 == 0)
        Rule("not_unique", lambda x, ctx: ctx.parent().value().count(x) == 1)
    """
    return RuleV(code, predicate)


# =============================================================================
# Prefab rules
# =============================================================================


def Present() -> V:
    """Validate a value is not None."""
    return RuleV("absent", lambda x: x is not None)


def Absent() -> V:
    """Validate a value is None."""
    return RuleV("present", lambda x: x is None)


def Gt(value: Any) -> V:
    """Validate greater than."""
    return RuleV(("not_gt", value), lambda x: x > value)


def Gteq(value: Any) -> V:
    """Validate greater than or equal."""
    return RuleV(("not_gteq", value), lambda x: x >= value)


def Lt(value: Any) -> V:
    """Validate less than."""
    return RuleV(("not_lt", value), lambda x: x < value)


def Lteq(value: Any) -> V:
    """Validate less than or equal."""
    return RuleV(("not_lteq", value), lambda x: x <= value)


def Eq(value: Any) -> V:
    """Validate exact equality."""
    return RuleV(("not_eq", value), lambda x: x == value)


def Neq(value: Any) -> V:
    """Validate inequality."""
    return RuleV(("eq", value), lambda x: x != value)


def IncludedIn(values: Container[Any]) -> V:
    """
    Validate value is in a collection of allowed values.

    Usage:
        IncludedIn({"active", "inactive", "pending"})
        IncludedIn(range(1, 11))
    """
    return RuleV(("not_included_in", values), lambda x: _contains(values, x))


def ExcludedFrom(values: Container[Any]) -> V:
    """Validate value is not in a collection of forbidden values."""
    return RuleV(("included_in", values), lambda x: not _contains(values, x))


def _contains(values: Container[Any], x: Any) -> bool:
    # Unhashable values cannot be members of sets or dict keys
    try:
        return x in values
    except TypeError:
        return False


def Matching(pattern: Any) -> V:
    """
    Validate value matches a condition.

    A regex (string or compiled) is searched for in string values; a class
    matches its instances; a range matches its members; any other callable
    is used as a predicate; anything else matches by equality.

    Usage:
        Matching(r"^[a-z]+$")
        Matching(re.compile(r"\\d{3}-\\d{4}"))
        Matching(int)
        Matching(range(1, 11))
    """
    if isinstance(pattern, (str, re.Pattern)):
        compiled = re.compile(pattern)

        def check(x: Any) -> bool:
            return isinstance(x, str) and compiled.search(x) is not None

    elif isinstance(pattern, type):

        def check(x: Any) -> bool:
            return isinstance(x, pattern)

    elif isinstance(pattern, range):

        def check(x: Any) -> bool:
            return _contains(pattern, x)

    elif callable(pattern):

        def check(x: Any) -> bool:
            return bool(pattern(x))

    else:

        def check(x: Any) -> bool:
            return x == pattern

    return RuleV(("not_matching", pattern), check)


# =============================================================================
# Combinators
# =============================================================================


def And(*validators: Any) -> V:
    """
    Run every validator on the same value.

    Accepts with the last validator's value when all accept; otherwise
    collects the errors of every rejecting validator, in order.

    Usage:
        And(Rule("not_even", lambda x: x % 2 == 0), Gt(10))
    """
    return _fold(AndV, validators, "And")


def Then(*validators: Any) -> V:
    """
    Chain validators, passing each accepted value on to the next.

    Stops at the first rejection.

    Usage:
        Then(Typed(CoercibleInteger), Gt(10))
    """
    return _fold(ThenV, validators, "Then")


def Implies(condition: Any, consequence: Any) -> V:
    """
    Validate with `consequence` only when `condition` accepts.

    Usage:
        Implies(Present(), Typed(Integer))  # None passes, else must be an int
    """
    return ImpliesV(to_validator(condition), to_validator(consequence))


def _fold(combinator: Callable[[V, V], V], validators: tuple[Any, ...], name: str) -> V:
    if len(validators) < 2:
        raise ConstructionError(f"{name}() needs at least two validators")
    return reduce(combinator, (to_validator(v) for v in validators))


# =============================================================================
# Structures
# =============================================================================


def Array(before: Any = PASS, each: Any = PASS, after: Any = PASS) -> V:
    """
    Validate a value is a homogeneous list.

    Args:
        before: Validator for the list as a whole, run first (e.g. count)
        each: Validator for every element
        after: Validator for the list of accepted elements

    Usage:
        Array(each=Typed(Integer) >> Gt(2))
        Array(before=Rule("too_small", lambda xs: len(xs) >= 3), each=int)
    """
    validator = ArrayV(
        before=to_validator(before),
        each=to_validator(each),
        after=to_validator(after),
    )
    logger.debug("Built %r", validator)
    return validator


def Hash(
    before: Any = PASS,
    mandatory: Mapping[Any, Any] | None = None,
    optional: Mapping[Any, Any] | None = None,
    other_keys: OtherKeys | str = OtherKeys.KEEP,
    after: Any = PASS,
) -> V:
    """
    Validate a value is a mapping with specified keys.

    Args:
        before: Validator for the mapping as a whole, run first
        mandatory: Keys that must be present, with their validators
        optional: Keys that may be present, with their validators
        other_keys: "keep", "trim" or "reject" keys with no validator
        after: Validator for the accepted mapping

    Raises:
        ConstructionError: If `other_keys` is not a known policy

    Usage:
        Hash(
            mandatory={"name": Typed(String)},
            optional={"age": Typed(Integer) >> Gteq(0)},
            other_keys="reject",
        )
    """
    validator = HashV(
        before=to_validator(before),
        mandatory={k: to_validator(v) for k, v in (mandatory or {}).items()},
        optional={k: to_validator(v) for k, v in (optional or {}).items()},
        other_keys=other_keys,
        after=to_validator(after),
    )
    logger.debug("Built %r", validator)
    return validator


def Tuple(*elements: Any) -> V:
    """
    Validate a value is a fixed-size list.

    Usage:
        Tuple(Eq(1), Eq("sym"))     # [1, "sym"]
        Tuple()                     # []
    """
    validator = TupleV(tuple(to_validator(element) for element in elements))
    logger.debug("Built %r", validator)
    return validator
