"""Main entry point for the exactinf package.

This module exposes the core classes of the exactinf library, making them
available for direct import: discrete variables and their canonically ordered
sets (Variable, VarSet), factor tables and factor graphs (Factor,
FactorGraph), and the exact inference algorithm (ExactInference).
"""
from . import errors, varset
from .errors import (
    ExactInfError,
    IndexOutOfRange,
    MalformedConfig,
    NotImplementedOperation,
    NumericDegeneracy,
)
from .factor import Factor
from .factor_graph import FactorGraph
from .inference import ExactInference, InferenceAlgorithm
from .properties import ExactInfProperties
from .variable import Variable
from .varset import VarSet, calc_state, calc_states, index_map, nr_states

__all__ = [
    'Variable',
    'VarSet',
    'Factor',
    'FactorGraph',
    'ExactInference',
    'ExactInfProperties',
    'InferenceAlgorithm',
    'ExactInfError',
    'IndexOutOfRange',
    'MalformedConfig',
    'NotImplementedOperation',
    'NumericDegeneracy',
    'nr_states',
    'calc_state',
    'calc_states',
    'index_map',
    'errors',
    'varset',
]
