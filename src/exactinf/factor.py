from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Literal

import attr
import chex
import jax
import jax.numpy as jnp
import numpy as np

from .errors import IndexOutOfRange
from .variable import Variable
from .varset import VarSet, calc_state, nr_states

jax.config.update("jax_enable_x64", True)


def _as_array(values) -> jax.Array:
    """Converts input to a floating point JAX array."""
    return jnp.asarray(values, dtype=jnp.float64)


@attr.dataclass(frozen=True, eq=False)
class Factor:
    """Represents a factor defined over a set of discrete variables.

    A factor is a non-negative (possibly unnormalized) table that assigns a
    value to every joint state of its `VarSet`.  The values are stored as an
    N-dimensional array with one axis per variable, in the canonical order of
    the `VarSet`.  The flat view returned by `datavector` is the Fortran-order
    ravel of that array, so entry `k` of the datavector is the value of the
    joint state with linear index `k` (see `exactinf.varset`).

    Attributes:
        vars (VarSet): The variables the factor depends on.
        values (jax.Array): A float64 array with shape `vars.shape`.

    Supported Operations:
        - Creation: `zeros`, `ones`, `uniform`, `random`, `from_vector`, `delta`.
        - Reshaping: `embed` to broadcast onto a larger set of variables.
        - Aggregation: `sum`, `max`, `marginal` for summing out variables.
        - Element-wise: `exp`, `log`, `normalize`.
        - Binary Ops: `+`, `-`, `*`, `/` over the union of both scopes.
        - Comparison: `dist`, `entropy`.

    Example Usage:
        >>> x0, x1 = Variable(0, 2), Variable(1, 3)
        >>> factor = Factor.ones(VarSet([x0, x1]))
        >>> print(factor.vars)
        {x0,x1}
    """
    vars: VarSet
    values: jax.Array = attr.field(converter=_as_array)

    def __attrs_post_init__(self):
        if self.values.shape != self.vars.shape:
            raise ValueError(
                f"values must have shape {self.vars.shape}, got {self.values.shape}."
            )

    # Constructors
    @classmethod
    def zeros(cls, vs: VarSet) -> Factor:
        """Creates a Factor object with all values initialized to zero."""
        return cls(vs, jnp.zeros(vs.shape))

    @classmethod
    def ones(cls, vs: VarSet) -> Factor:
        """Creates a Factor object with all values initialized to one."""
        return cls(vs, jnp.ones(vs.shape))

    @classmethod
    def uniform(cls, vs: VarSet) -> Factor:
        """Creates a normalized Factor object where every joint state is equally likely."""
        return cls(vs, jnp.full(vs.shape, 1.0 / nr_states(vs)))

    @classmethod
    def random(cls, vs: VarSet) -> Factor:
        """Creates a Factor object with random values (uniform 0-1)."""
        return cls(vs, np.random.rand(*vs.shape))

    @classmethod
    def from_vector(cls, vs: VarSet, vector) -> Factor:
        """Creates a Factor object from values listed in linear index order.

        Example Usage:
            >>> x0, x1 = Variable(0, 2), Variable(1, 2)
            >>> f = Factor.from_vector(VarSet([x0, x1]), [1, 2, 3, 4])
            >>> float(f[{x0: 1, x1: 0}])
            2.0
        """
        vector = _as_array(vector)
        if vector.shape != (nr_states(vs),):
            raise ValueError(
                f"Expected a vector of length {nr_states(vs)}, got shape {vector.shape}."
            )
        return cls(vs, jnp.reshape(vector, vs.shape, order="F"))

    @classmethod
    def delta(cls, vs: VarSet | Variable, states: Mapping[Variable, int]) -> Factor:
        """Creates a Factor that is one on a single joint state and zero elsewhere."""
        vs = VarSet(vs)
        vector = jnp.zeros(nr_states(vs)).at[calc_state(vs, states)].set(1.0)
        return cls.from_vector(vs, vector)

    # Reshaping operations
    def embed(self, vs: VarSet) -> Factor:
        """Broadcasts the factor onto a superset of its variables."""
        if not self.vars <= vs:
            raise ValueError(f"{vs} must contain {self.vars}.")
        shape = tuple(v.states if v in self.vars else 1 for v in vs)
        values = jnp.broadcast_to(self.values.reshape(shape), vs.shape)
        return Factor(vs, values)

    # Functions that aggregate along some subset of axes
    def _aggregate(self, fn: Callable, vs: VarSet | None = None) -> Factor:
        """Helper for aggregating values along the axes of the given variables."""
        vs = self.vars if vs is None else self.vars & vs
        values = fn(self.values, axis=self.vars.axes(vs))
        return Factor(self.vars - vs, values)

    def sum(self, vs: VarSet | None = None) -> Factor:
        """Sums out the given variables (all of them by default)."""
        return self._aggregate(jnp.sum, vs)

    def max(self, vs: VarSet | None = None) -> Factor:
        """Maximizes out the given variables (all of them by default)."""
        return self._aggregate(jnp.max, vs)

    def marginal(self, vs: VarSet | Variable, normed: bool = True) -> Factor:
        """Sums out every variable not in `vs`, optionally normalizing the result."""
        vs = VarSet(vs)
        if not vs <= self.vars:
            raise ValueError(f"Cannot marginalize {self.vars} onto {vs}.")
        result = self.sum(self.vars - vs)
        return result.normalize() if normed else result

    # Functions that operate element-wise
    def exp(self) -> Factor:
        """Applies element-wise exponentiation (jnp.exp) to the factor's values."""
        return Factor(self.vars, jnp.exp(self.values))

    def log(self) -> Factor:
        """Applies element-wise logarithm (jnp.log) to the factor's values."""
        return Factor(self.vars, jnp.log(self.values))

    def normalize(self) -> Factor:
        """Divides by the sum of all entries.

        A factor whose entries sum to zero normalizes to NaN entries.
        """
        return self / self.sum()

    def entropy(self) -> float:
        """Shannon entropy (in nats) of the factor, interpreted as a distribution."""
        p = self.values
        plogp = jnp.where(p > 0, p * jnp.log(jnp.where(p > 0, p, 1.0)), 0.0)
        return float(-jnp.sum(plogp))

    def dist(self, other: Factor, kind: Literal["l1", "linf", "tv", "kl"] = "linf") -> float:
        """Distance between two factors over the same variables."""
        if self.vars != other.vars:
            raise ValueError(f"Variables do not match {self.vars} != {other.vars}")
        p, q = self.values, other.values
        if kind == "l1":
            return float(jnp.sum(jnp.abs(p - q)))
        if kind == "linf":
            return float(jnp.max(jnp.abs(p - q)))
        if kind == "tv":
            return float(0.5 * jnp.sum(jnp.abs(p - q)))
        if kind == "kl":
            ratio = jnp.where(p > 0, p / q, 1.0)
            return float(jnp.sum(jnp.where(p > 0, p * jnp.log(ratio), 0.0)))
        raise ValueError(f"Unknown distance: {kind}")

    def copy(self) -> Factor:
        """Returns a copy of the factor (the values are immutable and shared)."""
        return Factor(self.vars, self.values)

    def __float__(self):
        if len(self.vars) > 0:
            raise ValueError("Factor must be defined over no variables to convert to float.")
        return float(self.values)

    # Binary operations between two factors
    def _binaryop(self, fn: Callable, other: Factor | chex.Numeric) -> Factor:
        """Helper for applying binary operations between this factor and another factor or scalar."""
        if not isinstance(other, Factor):
            other = Factor(VarSet(), other)
        union = self.vars | other.vars
        return Factor(union, fn(self.embed(union).values, other.embed(union).values))

    def __sub__(self, other: Factor | chex.Numeric) -> Factor:
        return self._binaryop(jnp.subtract, other)

    def __truediv__(self, other: Factor | chex.Numeric) -> Factor:
        return self._binaryop(jnp.divide, other)

    def __mul__(self, other: Factor | chex.Numeric) -> Factor:
        """Multiply two factors together.

        Example Usage:
            >>> x0, x1, x2 = Variable(0, 2), Variable(1, 3), Variable(2, 4)
            >>> f1 = Factor.ones(VarSet([x0, x1]))
            >>> f2 = Factor.ones(VarSet([x1, x2]))
            >>> print((f1 * f2).vars)
            {x0,x1,x2}

        Args:
          other: the other factor (or scalar) to multiply

        Returns:
          the product of the two factors, defined over the union of their variables
        """
        return self._binaryop(jnp.multiply, other)

    def __add__(self, other: Factor | chex.Numeric) -> Factor:
        return self._binaryop(jnp.add, other)

    def __radd__(self, other: chex.Numeric) -> Factor:
        return self + other

    def __rsub__(self, other: chex.Numeric) -> Factor:
        return (-1 * self) + other

    def __rmul__(self, other: chex.Numeric) -> Factor:
        return self * other

    # Access to individual entries
    def evaluate(self, states: Mapping[Variable, int]) -> float:
        """Value of the factor at a joint state.

        Entries of `states` for variables outside the factor are ignored and
        missing variables are taken to be in state 0.
        """
        relevant = {v: s for v, s in states.items() if v in self.vars}
        return float(self.datavector()[calc_state(self.vars, relevant)])

    def __getitem__(self, key: int | Mapping[Variable, int]) -> float:
        if isinstance(key, Mapping):
            return self.evaluate(key)
        key = int(key)
        if not 0 <= key < nr_states(self.vars):
            raise IndexOutOfRange(f"Index {key} is outside [0, {nr_states(self.vars)}).")
        return float(self.datavector()[key])

    def datavector(self, flatten: bool = True) -> jax.Array:
        """Returns the values in linear index order, or as the original array."""
        return jnp.ravel(self.values, order="F") if flatten else self.values

    def __str__(self) -> str:
        entries = ", ".join("%g" % x for x in np.asarray(self.datavector()))
        return "(%s, (%s))" % (self.vars, entries)
