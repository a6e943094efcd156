from exactinf import ExactInference, Factor, FactorGraph, Variable, VarSet
import logging
import numpy as np

logging.basicConfig(level=logging.INFO)

# binary variables: Cloudy, Sprinkler, Rain, WetGrass
C, S, R, W = [Variable(i, 2) for i in range(4)]

# conditional probability tables, values listed in linear index order
# (the lowest-label variable varies fastest)
P_C = Factor.from_vector(VarSet(C), [0.5, 0.5])
P_S_given_C = Factor.from_vector(VarSet([C, S]), [0.5, 0.9, 0.5, 0.1])
P_R_given_C = Factor.from_vector(VarSet([C, R]), [0.8, 0.2, 0.2, 0.8])
P_W_given_SR = Factor.from_vector(
    VarSet([S, R, W]), [1.0, 0.1, 0.1, 0.01, 0.0, 0.9, 0.9, 0.99]
)

fg = FactorGraph([P_C, P_S_given_C, P_R_given_C, P_W_given_SR])

engine = ExactInference(fg, {'verbose': 1})
engine.init()
engine.run()

for v in fg.vars:
    print(v, engine.belief(v))
print('logZ =', engine.log_z())

# condition on the grass being wet
posterior = ExactInference(fg.clamp(W, 1))
posterior.run()
print('P(W=1) =', np.exp(posterior.log_z()))
print('P(S | W=1) =', posterior.belief(S))
print('P(R | W=1) =', posterior.belief(R))
