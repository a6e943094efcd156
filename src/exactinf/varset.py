"""Defines the VarSet class and the linear indexing of joint states.

A `VarSet` holds distinct `Variable` objects sorted by label.  The canonical
order is enforced at construction, so two sets holding the same variables are
always laid out identically, whatever order the variables were supplied in.

Joint states of a `VarSet` are numbered with a mixed-radix, little-endian
scheme: the variable with the lowest label varies fastest.  For variables
x0, x1, x2 with S0, S1, S2 states the linear index of (s0, s1, s2) is

    s0 + s1 * S0 + s2 * S0 * S1

The module level functions `nr_states`, `calc_state` and `calc_states`
implement this scheme; every factor operation in the package relies on it.
"""
from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator, Mapping

import attr
import numpy as np

from .errors import IndexOutOfRange
from .variable import Variable


def _canonical(variables: Variable | Iterable[Variable]) -> tuple[Variable, ...]:
    """Sorts variables by label and removes duplicates."""
    if isinstance(variables, Variable):
        variables = [variables]
    result = tuple(sorted(set(variables)))
    labels = [v.label for v in result]
    if len(labels) != len(set(labels)):
        raise ValueError(f"Variables with equal labels must have equal states: {result}.")
    return result


@attr.dataclass(frozen=True, order=False)
class VarSet:
    """An ordered, duplicate-free set of variables.

    Attributes:
        variables (tuple[Variable, ...]): The variables sorted ascending by label.

    Example Usage:
        >>> x0, x1 = Variable(0, 2), Variable(1, 3)
        >>> vs = VarSet([x1, x0])
        >>> print(vs)
        {x0,x1}
        >>> vs.nr_states()
        6
        >>> vs.calc_state({x1: 2})
        4
    """
    variables: tuple[Variable, ...] = attr.field(factory=tuple, converter=_canonical)

    @property
    def labels(self) -> tuple[int, ...]:
        """The labels of the variables, in canonical order."""
        return tuple(v.label for v in self.variables)

    @property
    def shape(self) -> tuple[int, ...]:
        """The cardinalities of the variables, in canonical order."""
        return tuple(v.states for v in self.variables)

    def nr_states(self) -> int:
        return nr_states(self)

    def calc_state(self, states: Mapping[Variable, int]) -> int:
        return calc_state(self, states)

    def calc_states(self, linear_state: int) -> dict[Variable, int]:
        return calc_states(self, linear_state)

    def axes(self, variables: Iterable[Variable]) -> tuple[int, ...]:
        """Return the positions of the given variables within this set."""
        return tuple(self.variables.index(v) for v in variables)

    # Set algebra, always producing canonical sets
    def __or__(self, other: VarSet | Variable) -> VarSet:
        return VarSet(self.variables + VarSet(other).variables)

    def __and__(self, other: VarSet | Variable) -> VarSet:
        other = VarSet(other)
        return VarSet(v for v in self.variables if v in other)

    def __sub__(self, other: VarSet | Variable) -> VarSet:
        other = VarSet(other)
        return VarSet(v for v in self.variables if v not in other)

    def __le__(self, other: VarSet) -> bool:
        return set(self.variables) <= set(VarSet(other).variables)

    def __ge__(self, other: VarSet) -> bool:
        return set(self.variables) >= set(VarSet(other).variables)

    def __contains__(self, v: Variable) -> bool:
        return v in self.variables

    def __getitem__(self, i: int) -> Variable:
        return self.variables[i]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def __str__(self) -> str:
        return "{%s}" % ",".join(str(v) for v in self.variables)


def nr_states(vs: VarSet) -> int:
    """Number of joint states of the variables in `vs`.

    This is the product of the cardinalities, and 1 for the empty set.  The
    result is an exact Python integer, so it can become very large for
    sets with many variables.
    """
    return functools.reduce(lambda x, y: x * y, vs.shape, 1)


def calc_state(vs: VarSet, states: Mapping[Variable, int]) -> int:
    """Linear index of the joint state given by `states`.

    Variables of `vs` missing from `states` are taken to be in state 0.

    Args:
      vs: the variables that span the joint state space.
      states: a mapping from (some of) the variables of `vs` to their states.
    Returns:
      the linear index, in [0, nr_states(vs)).
    Raises:
      IndexOutOfRange: if `states` mentions a variable outside `vs` or a
        state outside [0, v.states).
    """
    unknown = [v for v in states if v not in vs]
    if unknown:
        raise IndexOutOfRange(f"Variables {unknown} are not in {vs}.")
    prod = 1
    state = 0
    for v in vs:
        s = int(states.get(v, 0))
        if not 0 <= s < v.states:
            raise IndexOutOfRange(f"State {s} of {v} is outside [0, {v.states}).")
        state += prod * s
        prod *= v.states
    return state


def calc_states(vs: VarSet, linear_state: int) -> dict[Variable, int]:
    """Joint state of the variables in `vs` that has index `linear_state`.

    This is the inverse of `calc_state`.

    Raises:
      IndexOutOfRange: if `linear_state` is not in [0, nr_states(vs)).
    """
    linear_state = int(linear_state)
    if linear_state < 0:
        raise IndexOutOfRange(f"Linear state {linear_state} is negative.")
    remaining = linear_state
    states = {}
    for v in vs:
        states[v] = remaining % v.states
        remaining //= v.states
    if remaining != 0:
        raise IndexOutOfRange(
            f"Linear state {linear_state} is outside [0, {nr_states(vs)}) for {vs}."
        )
    return states


def index_map(small: VarSet, big: VarSet) -> np.ndarray:
    """For every joint state of `big`, the index of its restriction to `small`.

    Example Usage:
        >>> x0, x1 = Variable(0, 2), Variable(1, 3)
        >>> index_map(VarSet(x1), VarSet([x0, x1])).tolist()
        [0, 0, 1, 1, 2, 2]

    Args:
      small: a subset of `big`.
      big: the variables whose joint states are enumerated.
    Returns:
      an integer array of length nr_states(big).
    """
    if not small <= big:
        raise ValueError(f"{small} is not a subset of {big}.")
    size = nr_states(big)
    if len(small) == 0:
        return np.zeros(size, dtype=int)
    big_states = np.unravel_index(np.arange(size), big.shape, order="F")
    small_states = [big_states[i] for i in big.axes(small)]
    return np.ravel_multi_index(small_states, small.shape, order="F")
