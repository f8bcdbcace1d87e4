"""
Schema operations for validryad.

Provides validate() and the class-based Contract entry point.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from .context import Context
from .core import V, to_validator
from .errors import ConstructionError
from .types import Result

logger = logging.getLogger(__name__)


def validate(data: Any, schema: Any) -> Result:
    """
    Validate data against a schema.

    Args:
        data: The value to validate
        schema: A validator, or shorthand accepted by to_validator()

    Returns:
        Ok(value) with the (possibly coerced) value if validation passes
        Err(((code, path), ...)) listing every violation otherwise

    Usage:
        schema = {
            "name": String,
            "age": Typed(CoercibleInteger) >> Gteq(0),
            "tags": [str],
        }
        result = validate({"name": "Alice", "age": "30", "tags": []}, schema)
    """
    return to_validator(schema)(data)


class Contract:
    """
    A named, reusable top-level validation.

    Usage:
        class UserContract(Contract):
            validation = Hash(mandatory={"name": String}, other_keys="trim")

        UserContract.call({"name": "Alice", "extra": 1})  # Ok({"name": "Alice"})

    or, equivalently:

        class UserContract(Contract):
            pass

        UserContract.specify(Hash(mandatory={"name": String}))
    """

    validation: ClassVar[Any] = None

    @classmethod
    def specify(cls, validation: Any) -> None:
        cls.validation = to_validator(validation)

    @classmethod
    def validator(cls) -> V:
        if cls.validation is None:
            raise ConstructionError(f"{cls.__name__} has no validation specified")
        return to_validator(cls.validation)

    @classmethod
    def call(cls, value: Any) -> Result:
        result = cls.validator()(value, Context(value))
        if result.is_ok():
            logger.debug("%s accepted value", cls.__name__)
        else:
            logger.debug("%s rejected value with %d errors", cls.__name__, len(result.errors))
        return result
