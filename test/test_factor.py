import unittest

import numpy as np
from parameterized import parameterized

from exactinf import Factor, IndexOutOfRange, Variable, VarSet

_A, _B, _C = Variable(0, 2), Variable(1, 3), Variable(4, 4)
_SCOPES = [VarSet(), VarSet(_B), VarSet([_A, _C]), VarSet([_A, _B, _C])]


class TestFactor(unittest.TestCase):

    @parameterized.expand([(vs,) for vs in _SCOPES])
    def test_datavector_follows_linear_index(self, vs):
        f = Factor.random(vs)
        vector = f.datavector()
        values = f.datavector(flatten=False)
        self.assertEqual(vector.shape, (vs.nr_states(),))
        for i in range(vs.nr_states()):
            states = vs.calc_states(i)
            self.assertEqual(float(vector[i]), float(values[tuple(states[v] for v in vs)]))
            self.assertEqual(f[i], f[states])

    def test_from_vector(self):
        f = Factor.from_vector(VarSet([_B, _A]), np.arange(6))
        self.assertEqual(f.evaluate({_A: 1, _B: 0}), 1.0)
        self.assertEqual(f.evaluate({_A: 0, _B: 1}), 2.0)
        self.assertEqual(f.evaluate({_A: 1, _B: 2, _C: 3}), 5.0)
        np.testing.assert_allclose(f.datavector(), np.arange(6))
        with self.assertRaises(ValueError):
            Factor.from_vector(VarSet([_A, _B]), np.arange(5))

    def test_getitem_out_of_range(self):
        f = Factor.ones(VarSet([_A, _B]))
        with self.assertRaises(IndexOutOfRange):
            f[6]
        with self.assertRaises(IndexOutOfRange):
            f[-1]

    def test_shape_mismatch(self):
        with self.assertRaises(ValueError):
            Factor(VarSet([_A, _B]), np.ones((3, 2)))

    def test_delta(self):
        f = Factor.delta(VarSet([_A, _B]), {_B: 2})
        expected = np.zeros(6)
        expected[4] = 1.0
        np.testing.assert_allclose(f.datavector(), expected)

    def test_multiply_broadcasts(self):
        f1 = Factor.random(VarSet([_A, _B]))
        f2 = Factor.random(VarSet([_B, _C]))
        product = f1 * f2
        self.assertEqual(product.vars, VarSet([_A, _B, _C]))
        for i in range(product.vars.nr_states()):
            states = product.vars.calc_states(i)
            np.testing.assert_allclose(product[i], f1[states] * f2[states])

    def test_embed_matches_index_map(self):
        from exactinf import index_map
        small, big = VarSet([_A, _C]), VarSet([_A, _B, _C])
        f = Factor.random(small)
        embedded = f.embed(big)
        np.testing.assert_allclose(
            embedded.datavector(), f.datavector()[index_map(small, big)]
        )
        with self.assertRaises(ValueError):
            f.embed(VarSet(_A))

    def test_marginal(self):
        vs = VarSet([_A, _B, _C])
        f = Factor.random(vs)
        marginal = f.marginal(VarSet([_C, _A]), normed=False)
        expected = np.zeros(marginal.vars.nr_states())
        for i in range(vs.nr_states()):
            states = vs.calc_states(i)
            expected[marginal.vars.calc_state({_A: states[_A], _C: states[_C]})] += f[i]
        np.testing.assert_allclose(marginal.datavector(), expected)

        normed = f.marginal(_B)
        self.assertEqual(normed.vars, VarSet(_B))
        np.testing.assert_allclose(float(normed.sum()), 1.0)
        with self.assertRaises(ValueError):
            f.marginal(Variable(9, 2))

    def test_normalize_zero(self):
        f = Factor.zeros(VarSet(_A)).normalize()
        self.assertTrue(np.all(np.isnan(f.datavector())))

    def test_arithmetic(self):
        f = Factor.from_vector(VarSet(_A), [1.0, 3.0])
        np.testing.assert_allclose((f + 1).datavector(), [2.0, 4.0])
        np.testing.assert_allclose((1 - f).datavector(), [0.0, -2.0])
        np.testing.assert_allclose((2 * f).datavector(), [2.0, 6.0])
        np.testing.assert_allclose((f / 2).datavector(), [0.5, 1.5])
        np.testing.assert_allclose(f.log().exp().datavector(), [1.0, 3.0])
        self.assertEqual(float(f.sum()), 4.0)
        self.assertEqual(float(f.max()), 3.0)

    def test_entropy_and_dist(self):
        p = Factor.from_vector(VarSet(_A), [0.5, 0.5])
        q = Factor.from_vector(VarSet(_A), [1.0, 0.0])
        np.testing.assert_allclose(p.entropy(), np.log(2))
        self.assertEqual(q.entropy(), 0.0)
        np.testing.assert_allclose(p.dist(q, "l1"), 1.0)
        np.testing.assert_allclose(p.dist(q, "linf"), 0.5)
        np.testing.assert_allclose(p.dist(q, "tv"), 0.5)
        np.testing.assert_allclose(q.dist(p, "kl"), np.log(2))
        self.assertEqual(p.dist(p, "kl"), 0.0)
        with self.assertRaises(ValueError):
            p.dist(Factor.uniform(VarSet(_B)))
        with self.assertRaises(ValueError):
            p.dist(q, "hellinger")

    def test_str(self):
        f = Factor.from_vector(VarSet([_A]), [1, 2])
        self.assertEqual(str(f), "({x0}, (1, 2))")


if __name__ == '__main__':
    unittest.main()
