"""
Exceptions raised for misuse of the validation engine.

Rejected input is never raised; it is returned as an Err. These exceptions
signal programmer errors that should surface immediately.
"""


class ValidryadError(Exception):
    """Base class for validryad failures."""


class StructuralError(ValidryadError):
    """Illegal navigation through a Context."""


class ConstructionError(ValidryadError):
    """A validator was built from invalid arguments."""


class InvalidValidatorError(ValidryadError):
    """A validator returned something other than Ok or Err."""


class UnwrapError(ValidryadError):
    """Attempted to take the value of an Err."""
