import unittest

from exactinf import ExactInfProperties, MalformedConfig


class TestProperties(unittest.TestCase):

    def test_defaults(self):
        props = ExactInfProperties()
        self.assertEqual(props.verbose, 0)
        self.assertEqual(props.to_dict(), {"verbose": 0})
        self.assertEqual(str(props), "[verbose=0]")

    def test_from_dict(self):
        self.assertEqual(ExactInfProperties.from_dict({"verbose": 3}).verbose, 3)
        self.assertEqual(ExactInfProperties.from_dict({}), ExactInfProperties())

    def test_invalid(self):
        with self.assertRaises(MalformedConfig):
            ExactInfProperties.from_dict({"verbose": 1, "updates": "SEQFIX"})
        with self.assertRaises(MalformedConfig):
            ExactInfProperties(verbose=True)
        # MalformedConfig is still a ValueError
        with self.assertRaises(ValueError):
            ExactInfProperties(verbose=-2)


if __name__ == '__main__':
    unittest.main()
