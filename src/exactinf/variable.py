"""Defines the Variable class for discrete random variables.

A `Variable` is identified by an integer label and carries the number of
states it can take.  Variables are ordered by label, which is the order every
`VarSet` uses to lay out joint states.
"""
import attr


def _non_negative(instance, attribute, value):
    if value < 0:
        raise ValueError(f"{attribute.name} must be non-negative, got {value}.")


def _positive(instance, attribute, value):
    if value < 1:
        raise ValueError(f"{attribute.name} must be at least 1, got {value}.")


@attr.dataclass(frozen=True, order=True)
class Variable:
    """A discrete random variable.

    Attributes:
        label (int): Unique, non-negative identifier of the variable.
        states (int): Number of values (cardinality) the variable can take.

    Example Usage:
        >>> x = Variable(0, 2)
        >>> print(x)
        x0
        >>> Variable(1, 3) > x
        True
    """
    label: int = attr.field(converter=int, validator=_non_negative)
    states: int = attr.field(default=2, converter=int, validator=_positive)

    def __str__(self) -> str:
        return "x%d" % self.label
