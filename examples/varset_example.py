from exactinf import Variable, VarSet

x0 = Variable(0, 2)
x1 = Variable(1, 3)

# the order in which variables are given does not matter
X = VarSet([x1, x0])
print('X =', X, 'has', X.nr_states(), 'joint states')

# the state of x0 varies fastest
print('Linear index | x0 | x1')
for S in range(X.nr_states()):
    states = X.calc_states(S)
    print('%12d | %2d | %2d' % (S, states[x0], states[x1]))
    assert X.calc_state(states) == S
