"""
Core validator classes for validryad.

Provides the V base class with functional composition, the primitive and
combinator validators, and the structural ArrayV, HashV, TupleV validators.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable

from .coercible import PydanticType
from .context import Context
from .errors import ConstructionError, InvalidValidatorError
from .types import Code, CoercibleType, Err, Ok, Result, combine

logger = logging.getLogger(__name__)

SEQUENCE_TYPES = (list, tuple)


class V:
    """
    Base class for every validator.

    Subclasses implement `validate(value, context)`. Validators are
    immutable and hold no per-call state, so one instance can be shared
    freely.

    Usage:
        positive_int = Typed(int) >> Gt(0)
        positive_int("5")            # Ok(5)
        positive_int(-1)             # Err(((("not_gt", 0), ()),))
    """

    __slots__ = ()

    def validate(self, value: Any, context: Context) -> Result:
        raise NotImplementedError

    def __call__(self, value: Any, context: Context | None = None) -> Result:
        """
        Validate a value.

        Without a context, the value becomes the root of a fresh Context.
        """
        if context is None:
            context = Context(value)
        return self.validate(value, context)

    def call(self, value: Any) -> Result:
        """Validate a value from the root."""
        return self.validate(value, Context(value))

    def and_(self, other: Any) -> AndV:
        """
        Run both validators on the same value and merge their outcomes.

        Usage:
            Rule("not_even", lambda x: x % 2 == 0) & Gt(10)
        """
        return AndV(self, to_validator(other))

    def then(self, other: Any) -> ThenV:
        """
        Feed this validator's accepted value into `other`.

        Usage:
            Typed(CoercibleInteger) >> Gt(10)
        """
        return ThenV(self, to_validator(other))

    def implies(self, other: Any) -> ImpliesV:
        """
        Only run `other` when this validator accepts.

        Usage:
            Present().implies(Typed(int))
        """
        return ImpliesV(self, to_validator(other))

    __and__ = and_
    __rshift__ = then

    def __rand__(self, other: Any) -> AndV:
        """Support `int & Gt(0)` where the shorthand comes first."""
        return AndV(to_validator(other), self)

    def __rrshift__(self, other: Any) -> ThenV:
        """Support `int >> Gt(0)` where the shorthand comes first."""
        return ThenV(to_validator(other), self)


# =============================================================================
# Primitive validators
# =============================================================================


@dataclass(frozen=True, slots=True)
class PassV(V):
    """Accepts any value unchanged."""

    def validate(self, value: Any, context: Context) -> Ok[Any]:
        return Ok(value)


PASS = PassV()


@dataclass(frozen=True, slots=True)
class DefaultV(V):
    """Substitutes `default` when the value is None."""

    default: Any

    def validate(self, value: Any, context: Context) -> Ok[Any]:
        return Ok(self.default if value is None else value)


@dataclass(frozen=True, slots=True)
class TypedV(V):
    """Delegates to an external coercible type."""

    type: CoercibleType

    def validate(self, value: Any, context: Context) -> Result:
        result = self.type.try_coerce(value)
        if isinstance(result, Ok):
            return result
        return context.fail(("expected_type", self.type.name))


def predicate_arity(predicate: Callable[..., Any]) -> int:
    """
    Number of leading (value, context) arguments a predicate takes.

    Every positional parameter counts, with or without a default.

    Raises:
        ConstructionError: If the predicate declares more than two
            positional parameters, takes *args, or requires a
            keyword-only argument.
    """
    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        return 1

    positional = 0
    unsupported = False
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
        elif param.kind is param.VAR_POSITIONAL:
            unsupported = True
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            unsupported = True

    if unsupported or positional > 2:
        logger.debug("Rejecting predicate %r", predicate)
        raise ConstructionError(
            f"Rule predicate must accept 0-2 params: value, context; given: {predicate!r}"
        )

    return positional


@dataclass(frozen=True, slots=True)
class RuleV(V):
    """
    Accepts the value when `predicate` holds, else rejects with `code`.

    The predicate receives as many of (value, context) as it declares.
    """

    code: Code
    predicate: Callable[..., Any]
    arity: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arity", predicate_arity(self.predicate))

    def validate(self, value: Any, context: Context) -> Result:
        args = (value, context)[: self.arity]
        if self.predicate(*args):
            return Ok(value)
        return context.fail(self.code)


# =============================================================================
# Combinators
# =============================================================================


@dataclass(frozen=True, slots=True)
class AndV(V):
    """
    Runs both sides on the same value.

    Accepts with the right-hand value when both accept; otherwise rejects
    with the errors of every rejecting side, left first.
    """

    left: V
    right: V

    def validate(self, value: Any, context: Context) -> Result:
        match (self.left(value, context), self.right(value, context)):
            case (Ok(), Ok() as success):
                return success
            case (Ok(), Err() as failure):
                return failure
            case (Err() as failure, Ok()):
                return failure
            case (Err() as left_failure, Err() as right_failure):
                return left_failure + right_failure
            case outcomes:
                raise InvalidValidatorError(
                    f"Unexpected outcomes {outcomes!r} - invalid validator?"
                )


@dataclass(frozen=True, slots=True)
class ThenV(V):
    """
    Short-circuiting sequence.

    The right-hand side only runs when the left accepts, and receives the
    left's accepted value. This is how coerced values get validated further.
    """

    left: V
    right: V

    def validate(self, value: Any, context: Context) -> Result:
        return self.left(value, context).bind(lambda lvalue: self.right(lvalue, context))


@dataclass(frozen=True, slots=True)
class ImpliesV(V):
    """
    Uses the left-hand side as a gate.

    If the left rejects, the original value is accepted as-is. If it
    accepts, the right runs on the original value (not the left's output)
    and its result is returned.
    """

    left: V
    right: V

    def validate(self, value: Any, context: Context) -> Result:
        return self.left(value, context).either(
            lambda _: self.right(value, context),
            lambda _: Ok(value),
        )


# =============================================================================
# Structural validators
# =============================================================================


def affirm_is_sequence(value: Any, context: Context) -> Result:
    if isinstance(value, SEQUENCE_TYPES):
        return Ok(value)
    return context.fail(("expected_type", "Array"))


def affirm_is_mapping(value: Any, context: Context) -> Result:
    if isinstance(value, Mapping):
        return Ok(value)
    return context.fail(("expected_type", "Hash"))


@dataclass(frozen=True, slots=True)
class ArrayV(V):
    """
    Validator for homogeneous sequences.

    Runs `before` on the whole sequence, then `each` on every element
    (collecting all element errors), then `after` on the list of accepted
    elements. A rejection at any stage stops the later stages.
    """

    before: V = PASS
    each: V = PASS
    after: V = PASS

    def validate(self, value: Any, context: Context) -> Result:
        return (
            affirm_is_sequence(value, context)
            .bind(lambda checked: self.before(checked, context))
            .bind(lambda before_value: affirm_is_sequence(before_value, context))
            .bind(lambda before_value: self._validate_elements(before_value, context))
            .bind(lambda elements: self.after(elements, context))
        )

    def _validate_elements(self, value: Any, context: Context) -> Result:
        return combine(
            self.each(element, context.child(index))
            for index, element in enumerate(value)
        )


class OtherKeys(Enum):
    """
    Policy for map keys that have no validator.

    - KEEP: Pass the entry through unchanged
    - TRIM: Drop the entry from the accepted map
    - REJECT: Reject with ("invalid_key", key) at the map's path
    """

    KEEP = "keep"
    TRIM = "trim"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class HashV(V):
    """
    Validator for keyed maps.

    Every present key is checked, either by its own validator or by the
    `other_keys` policy, and every absent mandatory key is reported. All
    errors are collected: per-key errors in the map's key order, then
    missing keys in declaration order.
    """

    before: V = PASS
    mandatory: Mapping[Any, V] = field(default_factory=dict)
    optional: Mapping[Any, V] = field(default_factory=dict)
    other_keys: OtherKeys | str = OtherKeys.KEEP
    after: V = PASS
    key_validators: Mapping[Any, V] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            policy = OtherKeys(self.other_keys)
        except (ValueError, TypeError):
            logger.debug("Rejecting other-key policy %r", self.other_keys)
            raise ConstructionError(
                f"Invalid other-key handler {self.other_keys!r}; "
                f"expected one of {[p.value for p in OtherKeys]}"
            ) from None

        object.__setattr__(self, "other_keys", policy)
        object.__setattr__(self, "mandatory", MappingProxyType(dict(self.mandatory)))
        object.__setattr__(self, "optional", MappingProxyType(dict(self.optional)))
        object.__setattr__(
            self,
            "key_validators",
            MappingProxyType({**self.mandatory, **self.optional}),
        )

    def validate(self, value: Any, context: Context) -> Result:
        return (
            affirm_is_mapping(value, context)
            .bind(lambda checked: self.before(checked, context))
            .bind(lambda before_value: affirm_is_mapping(before_value, context))
            .bind(lambda before_value: self._validate_entries(before_value, context))
            .bind(lambda entries: self.after(entries, context))
        )

    def _validate_entries(self, value: Mapping[Any, Any], context: Context) -> Result:
        keys: list[Any] = []
        results: list[Result] = []

        for key, item in value.items():
            if key in self.key_validators:
                result = self.key_validators[key](item, context.child(key))
            else:
                match self.other_keys:
                    case OtherKeys.KEEP:
                        result = Ok(item)
                    case OtherKeys.TRIM:
                        continue
                    case OtherKeys.REJECT:
                        result = context.fail(("invalid_key", key))
            keys.append(key)
            results.append(result)

        for key in self.mandatory:
            if key not in value:
                results.append(context.fail(("missing_key", key)))

        return combine(results).map(lambda values: dict(zip(keys, values)))


@dataclass(frozen=True, slots=True)
class TupleV(V):
    """
    Validator for fixed-size heterogeneous sequences.

    The size must match exactly before any element is checked; then each
    element is validated by the validator at the same position, collecting
    all errors.
    """

    elements: tuple[V, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    def validate(self, value: Any, context: Context) -> Result:
        return (
            affirm_is_sequence(value, context)
            .bind(lambda checked: self._affirm_size(checked, context))
            .bind(lambda checked: self._validate_elements(checked, context))
        )

    def _affirm_size(self, value: Any, context: Context) -> Result:
        expected_size = len(self.elements)
        if len(value) != expected_size:
            return context.fail(("expected_size", expected_size))
        return Ok(value)

    def _validate_elements(self, value: Any, context: Context) -> Result:
        return combine(
            validator(element, context.child(index))
            for index, (validator, element) in enumerate(zip(self.elements, value))
        )


def is_coercible_type(v: Any) -> bool:
    return (
        not isinstance(v, type)
        and callable(getattr(v, "try_coerce", None))
        and isinstance(getattr(v, "name", None), str)
    )


def to_validator(v: Any) -> V:
    """
    Coerce shorthand to a validator.

    Conversion rules:
        V -> pass through
        coercible type -> TypedV
        class -> TypedV(PydanticType(class))
        dict -> HashV with every key mandatory
        [x] -> ArrayV validating each element with x
        tuple -> TupleV with one validator per position
        Callable -> RuleV with code "rule_failed"
    """
    if isinstance(v, V):
        return v

    if is_coercible_type(v):
        return TypedV(v)

    if isinstance(v, type):
        return TypedV(PydanticType(v))

    if isinstance(v, dict):
        return HashV(mandatory={k: to_validator(val) for k, val in v.items()})

    if isinstance(v, list):
        if len(v) != 1:
            raise ConstructionError(
                f"List shorthand needs exactly one element validator, got {len(v)}"
            )
        return ArrayV(each=to_validator(v[0]))

    if isinstance(v, tuple):
        return TupleV(tuple(to_validator(item) for item in v))

    if callable(v):
        return RuleV("rule_failed", v)

    raise ConstructionError(f"Cannot convert {type(v).__name__} to validator")
