"""Exception and warning types raised by the exactinf package.

Each exception also derives from the closest builtin exception so callers
can keep catching ``ValueError``, ``IndexError`` or ``NotImplementedError``.
"""


class ExactInfError(Exception):
    """Base class for all errors raised by exactinf."""


class MalformedConfig(ExactInfError, ValueError):
    """An unrecognized or invalid configuration option was supplied."""


class IndexOutOfRange(ExactInfError, IndexError):
    """A linear index, state or variable lies outside the expected range."""


class NotImplementedOperation(ExactInfError, NotImplementedError):
    """The operation only makes sense for iterative inference algorithms."""


class NumericDegeneracy(RuntimeWarning):
    """The joint distribution has zero total mass, so beliefs are not finite."""
