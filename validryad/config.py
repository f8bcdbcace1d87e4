"""
Context manager for validation configuration (e.g., strict mode).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Whether undecided coercible types refuse to coerce
_strict_coercion: ContextVar[bool] = ContextVar("strict_coercion", default=False)


def is_strict() -> bool:
    """Check if coercion is currently disabled for undecided types."""
    return _strict_coercion.get()


@contextmanager
def validation_context(*, strict: bool = False):
    """
    Context manager for validation configuration.

    Args:
        strict: If True, coercible types that were not given an explicit
               strictness refuse to coerce (e.g. "1" is not an int).

    Example:
        from validryad import Typed, validation_context

        age = Typed(int)

        age("42")  # Ok(42) - lax by default

        with validation_context(strict=True):
            age("42")  # Err(((("expected_type", "int"), ()),))
    """
    token = _strict_coercion.set(strict)
    try:
        yield
    finally:
        _strict_coercion.reset(token)
