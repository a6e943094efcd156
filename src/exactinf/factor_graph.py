"""Defines the FactorGraph class, a product of factors over discrete variables.

The factor graph is the read-only input of the inference algorithms.  It
keeps the factors in the order they were given and the variables they mention
sorted by label, and records the bipartite variable/factor adjacency as a
`networkx` graph.
"""
from __future__ import annotations

import functools
from collections.abc import Sequence

import networkx as nx

from .errors import IndexOutOfRange
from .factor import Factor
from .variable import Variable
from .varset import VarSet, nr_states


class FactorGraph:
    """A collection of factors defining the joint distribution prod_I f_I.

    Attributes:
        factors (tuple[Factor, ...]): The factors, in the given order.
        vars (tuple[Variable, ...]): All variables appearing in some factor,
            sorted by label.
        graph (nx.Graph): Bipartite graph with nodes ("var", i) and
            ("factor", I) and an edge whenever factor I depends on variable i.

    Example Usage:
        >>> a, b = Variable(0, 2), Variable(1, 2)
        >>> fg = FactorGraph([Factor.ones(VarSet([a, b])), Factor.ones(VarSet(b))])
        >>> fg.nr_vars(), fg.nr_factors(), fg.nb_v(1)
        (2, 2, [0, 1])
    """

    def __init__(self, factors: Sequence[Factor]):
        self.factors = tuple(factors)
        # raises ValueError when two factors disagree on a cardinality
        variables = functools.reduce(lambda a, b: a | b, [f.vars for f in self.factors], VarSet())
        self.vars = variables.variables
        self._var_index = {v: i for i, v in enumerate(self.vars)}

        self.graph = nx.Graph()
        self.graph.add_nodes_from([("var", i) for i in range(len(self.vars))], bipartite=0)
        self.graph.add_nodes_from([("factor", I) for I in range(len(self.factors))], bipartite=1)
        for I, f in enumerate(self.factors):
            for v in f.vars:
                self.graph.add_edge(("var", self._var_index[v]), ("factor", I))

    def nr_vars(self) -> int:
        return len(self.vars)

    def nr_factors(self) -> int:
        return len(self.factors)

    def var(self, i: int) -> Variable:
        return self.vars[i]

    def factor(self, I: int) -> Factor:
        return self.factors[I]

    def find_var(self, v: Variable) -> int:
        """Position of `v` among the variables of the graph."""
        if v not in self._var_index:
            raise IndexOutOfRange(f"Variable {v} is not part of the factor graph.")
        return self._var_index[v]

    def find_factor(self, vs: VarSet) -> int | None:
        """Position of the first factor defined over exactly `vs`, if any."""
        vs = VarSet(vs)
        for I, f in enumerate(self.factors):
            if f.vars == vs:
                return I
        return None

    def nb_v(self, i: int) -> list[int]:
        """Positions of the factors that depend on variable i."""
        return sorted(I for _, I in self.graph.neighbors(("var", i)))

    def nb_f(self, I: int) -> list[int]:
        """Positions of the variables factor I depends on."""
        return sorted(i for _, i in self.graph.neighbors(("factor", I)))

    def nr_joint_states(self) -> int:
        """Size of the joint state space, i.e. the cost of exact enumeration."""
        return nr_states(VarSet(self.vars))

    def is_connected(self) -> bool:
        if self.graph.number_of_nodes() == 0:
            return True
        return nx.is_connected(self.graph)

    def clamp(self, v: Variable, state: int) -> FactorGraph:
        """Returns a new graph in which variable `v` is observed in `state`.

        Every factor depending on `v` is multiplied by a point mass on `state`,
        so the factors keep their positions and scopes.
        """
        i = self.find_var(v)
        delta = Factor.delta(v, {v: state})
        factors = list(self.factors)
        for I in self.nb_v(i):
            factors[I] = factors[I] * delta
        return FactorGraph(factors)

    def __str__(self) -> str:
        return "FactorGraph(%d variables, %d factors)" % (self.nr_vars(), self.nr_factors())
