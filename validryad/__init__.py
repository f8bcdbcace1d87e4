"""
Validryad - Composable validation of tree-shaped data.

Usage:
    from validryad import Array, Gt, Hash, Integer, Typed

    schema = Hash(
        mandatory={"id": Typed(Integer)},
        optional={"scores": Array(each=Typed(Integer) >> Gt(0))},
        other_keys="reject",
    )

    result = schema({"id": 1, "scores": [3, 0]})
    # Err(((("not_gt", 0), ("scores", 1)),))
"""

import logging

from .coercible import (
    Boolean,
    CoercibleBoolean,
    CoercibleDecimal,
    CoercibleFloat,
    CoercibleInteger,
    CoercibleString,
    Decimal,
    Float,
    Integer,
    PydanticType,
    String,
    coercible,
    strict,
)
from .config import is_strict, validation_context
from .context import Context
from .core import (
    PASS,
    AndV,
    ArrayV,
    DefaultV,
    HashV,
    ImpliesV,
    OtherKeys,
    PassV,
    RuleV,
    ThenV,
    TupleV,
    TypedV,
    V,
    to_validator,
)
from .errors import (
    ConstructionError,
    InvalidValidatorError,
    StructuralError,
    UnwrapError,
    ValidryadError,
)
from .schema import Contract, validate
from .types import CoercibleType, Err, Ok, combine
from .validators import (
    Absent,
    And,
    Array,
    Default,
    Eq,
    ExcludedFrom,
    Gt,
    Gteq,
    Hash,
    Implies,
    IncludedIn,
    Lt,
    Lteq,
    Matching,
    Neq,
    Pass,
    Present,
    Rule,
    Then,
    Tuple,
    Typed,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Result types
    "Ok",
    "Err",
    "combine",
    # Context
    "Context",
    # Core
    "V",
    "PASS",
    "PassV",
    "DefaultV",
    "TypedV",
    "RuleV",
    "AndV",
    "ThenV",
    "ImpliesV",
    "ArrayV",
    "HashV",
    "TupleV",
    "OtherKeys",
    "to_validator",
    # Validators
    "Pass",
    "Default",
    "Typed",
    "Rule",
    "Present",
    "Absent",
    "Gt",
    "Gteq",
    "Lt",
    "Lteq",
    "Eq",
    "Neq",
    "IncludedIn",
    "ExcludedFrom",
    "Matching",
    "And",
    "Then",
    "Implies",
    "Array",
    "Hash",
    "Tuple",
    # Types
    "CoercibleType",
    "PydanticType",
    "strict",
    "coercible",
    "Integer",
    "Float",
    "String",
    "Boolean",
    "Decimal",
    "CoercibleInteger",
    "CoercibleFloat",
    "CoercibleString",
    "CoercibleBoolean",
    "CoercibleDecimal",
    # Configuration
    "validation_context",
    "is_strict",
    # Schema
    "validate",
    "Contract",
    # Errors
    "ValidryadError",
    "StructuralError",
    "ConstructionError",
    "InvalidValidatorError",
    "UnwrapError",
]
