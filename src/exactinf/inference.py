"""Inference algorithms for factor graphs.

`InferenceAlgorithm` describes the operations every inference algorithm
offers, so exact and approximate algorithms can be used interchangeably by
code that compares them.  `ExactInference` is the reference implementation:
it materializes the full joint distribution, which makes it exact but
exponential in the number of variables.  It is meant for small graphs and
for validating approximate algorithms.
"""
from __future__ import annotations

import functools
import logging
import operator
import time
import warnings
from collections.abc import Mapping
from typing import Any, Protocol

import jax.numpy as jnp

from .errors import NotImplementedOperation, NumericDegeneracy
from .factor import Factor
from .factor_graph import FactorGraph
from .properties import ExactInfProperties
from .variable import Variable
from .varset import VarSet

logger = logging.getLogger(__name__)


class InferenceAlgorithm(Protocol):
    """
    Defines the operations shared by inference algorithms on a factor graph.

    Usage follows the same sequence for every algorithm: `init` to reset the
    internal state, `run` to compute, then `belief`, `beliefs` and `log_z`
    to query the results.  Iterative algorithms additionally report their
    convergence through `max_diff` and `iterations`; algorithms for which
    these are meaningless raise `NotImplementedOperation`.
    """

    @property
    def fg(self) -> FactorGraph:
        """The factor graph the algorithm is bound to."""

    def identify(self) -> str:
        """Name and options of the algorithm, for logging."""

    def init(self, vs: VarSet | None = None) -> None:
        """Resets the state of the algorithm."""

    def run(self) -> float:
        """Performs inference and returns a cost measure."""

    def belief(self, vs: Variable | VarSet) -> Factor:
        """The (approximate) marginal over a variable or a set of variables."""

    def beliefs(self) -> list[Factor]:
        """All variable beliefs followed by all factor beliefs."""

    def log_z(self) -> float:
        """The (approximate) log partition sum."""

    def max_diff(self) -> float:
        """Largest change of a belief during the last iteration."""

    def iterations(self) -> int:
        """Number of iterations performed by the last run."""


class ExactInference:
    """Exact inference by explicit enumeration of all joint states.

    Attributes:
        props (ExactInfProperties): The options of the algorithm.

    Example Usage:
        >>> a, b = Variable(0, 2), Variable(1, 2)
        >>> fg = FactorGraph([Factor.ones(VarSet([a, b]))])
        >>> engine = ExactInference(fg, {"verbose": 0})
        >>> engine.init()
        >>> _ = engine.run()
        >>> engine.belief(a).datavector().tolist()
        [0.5, 0.5]
    """
    name = "EXACT"

    def __init__(
        self,
        fg: FactorGraph,
        properties: ExactInfProperties | Mapping[str, Any] | None = None,
    ):
        self._fg = fg
        self.props = ExactInfProperties()
        self.set_properties({} if properties is None else properties)
        self._beliefs_v = [Factor.ones(VarSet(v)) for v in fg.vars]
        self._beliefs_f = [Factor.ones(f.vars) for f in fg.factors]
        self._log_z = 0.0

    @property
    def fg(self) -> FactorGraph:
        return self._fg

    def set_properties(self, opts: ExactInfProperties | Mapping[str, Any]) -> None:
        """Validates and installs new options; the old ones are kept on failure."""
        if not isinstance(opts, ExactInfProperties):
            opts = ExactInfProperties.from_dict(opts)
        self.props = opts

    def get_properties(self) -> dict[str, Any]:
        return self.props.to_dict()

    def print_properties(self) -> str:
        return str(self.props)

    def identify(self) -> str:
        return self.name + self.print_properties()

    def init(self, vs: VarSet | None = None) -> None:
        """Fills every belief with ones and sets the log partition sum to 0.

        Reinitializing only the beliefs of some variables `vs` is not
        supported, since there are no messages to reset.
        """
        if vs is not None:
            raise NotImplementedOperation(f"{self.name} cannot reinitialize a subset of variables.")
        self._beliefs_v = [Factor.ones(VarSet(v)) for v in self._fg.vars]
        self._beliefs_f = [Factor.ones(f.vars) for f in self._fg.factors]
        self._log_z = 0.0

    def run(self) -> float:
        """Computes all beliefs and the log partition sum.

        The joint distribution is built by multiplying all factors together;
        variable and factor beliefs are its normalized marginals.  When the
        joint has zero mass the beliefs contain NaN, the log partition sum is
        -inf and a `NumericDegeneracy` warning is issued.

        Returns:
            The elapsed wall-clock time in seconds.
        """
        tic = time.perf_counter()
        if self.props.verbose >= 1:
            logger.info(
                "Starting %s on %d joint states...",
                self.identify(),
                self._fg.nr_joint_states(),
            )

        joint = functools.reduce(operator.mul, self._fg.factors, Factor.ones(VarSet()))
        total = float(joint.sum())
        log_z = float(jnp.log(total))
        if not total > 0:
            warnings.warn(
                f"Total mass of the joint distribution is {total}; beliefs are not finite.",
                NumericDegeneracy,
                stacklevel=2,
            )

        beliefs_v = []
        for v in self._fg.vars:
            beliefs_v.append(joint.marginal(v))
            if self.props.verbose >= 2:
                logger.debug("Belief of %s: %s", v, beliefs_v[-1])
        beliefs_f = []
        for f in self._fg.factors:
            beliefs_f.append(joint.marginal(f.vars))
            if self.props.verbose >= 2:
                logger.debug("Belief of %s: %s", f.vars, beliefs_f[-1])

        self._beliefs_v, self._beliefs_f, self._log_z = beliefs_v, beliefs_f, log_z
        elapsed = time.perf_counter() - tic
        if self.props.verbose >= 1:
            logger.info("Finished %s in %.3fs, logZ=%g", self.identify(), elapsed, log_z)
        return elapsed

    def belief_v(self, i: int) -> Factor:
        """Belief of the i'th variable of the factor graph."""
        return self._beliefs_v[i].copy()

    def belief_f(self, I: int) -> Factor:
        """Belief over the scope of the I'th factor of the factor graph."""
        return self._beliefs_f[I].copy()

    def belief(self, vs: Variable | VarSet) -> Factor:
        """Belief of a single variable or of a set of variables.

        Only the empty set, single variables and sets equal to the scope of a
        factor are supported.
        """
        if isinstance(vs, Variable):
            return self.belief_v(self._fg.find_var(vs))
        vs = VarSet(vs)
        if len(vs) == 0:
            return Factor.ones(vs)
        if len(vs) == 1:
            return self.belief(vs[0])
        I = self._fg.find_factor(vs)
        if I is None:
            raise NotImplementedOperation(f"{self.name} has no belief for {vs}.")
        return self.belief_f(I)

    def beliefs(self) -> list[Factor]:
        return [b.copy() for b in self._beliefs_v] + [b.copy() for b in self._beliefs_f]

    def log_z(self) -> float:
        """Log partition sum of the last run (0 before the first run)."""
        return self._log_z

    def max_diff(self) -> float:
        raise NotImplementedOperation(f"{self.name} is not iterative.")

    def iterations(self) -> int:
        raise NotImplementedOperation(f"{self.name} is not iterative.")
