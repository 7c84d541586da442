"""
Tests for the distribution module.
"""

import unittest
import numpy as np

from tabular_rl.distribution import Choose, Categorical


class TestDistribution(unittest.TestCase):
    """Test cases for the distribution module."""

    def test_choose(self):
        """Test Choose distribution."""
        options = [1, 2, 3, 4, 5]
        c = Choose(options)

        samples = c.sample_n(1000, np.random.default_rng(0))
        self.assertEqual(len(samples), 1000)
        for s in samples:
            self.assertIn(s, options)
        self.assertEqual(set(samples), set(options))

        # E[X] = (1 + 2 + 3 + 4 + 5) / 5 = 3
        self.assertEqual(c.expectation(lambda x: x), 3.0)

    def test_choose_rejects_empty(self):
        with self.assertRaises(ValueError):
            Choose([])

    def test_categorical_select(self):
        """The first outcome whose cumulative probability exceeds the draw wins."""
        c = Categorical([0.25, 0.5, 0.25])
        self.assertEqual(c.select(0.0), 0)
        self.assertEqual(c.select(0.24), 0)
        self.assertEqual(c.select(0.25), 1)
        self.assertEqual(c.select(0.74), 1)
        self.assertEqual(c.select(0.75), 2)
        self.assertEqual(c.select(0.999), 2)

    def test_categorical_skips_zero_probability_outcomes(self):
        c = Categorical([0.0, 1.0, 0.0])
        self.assertEqual(c.select(0.0), 1)
        self.assertEqual(c.select(0.5), 1)

    def test_categorical_falls_back_to_last_outcome(self):
        """Rounding that keeps the total below the draw selects the last outcome."""
        c = Categorical([0.3, 0.3])
        self.assertEqual(c.select(0.9), 1)

        c = Categorical([0.5, 0.4999999, 0.0])
        self.assertEqual(c.select(0.99999999), 2)

    def test_categorical_point_mass_sampling(self):
        c = Categorical([0.0, 0.0, 1.0, 0.0])
        rng = np.random.default_rng(7)
        self.assertEqual(set(c.sample_n(200, rng)), {2})

    def test_categorical_sampling_frequencies(self):
        c = Categorical([0.25, 0.75])
        samples = c.sample_n(4000, np.random.default_rng(1))
        self.assertAlmostEqual(np.mean(samples), 0.75, delta=0.03)

    def test_categorical_expectation(self):
        c = Categorical([0.25, 0.5, 0.25])
        values = np.array([10.0, -2.0, 4.0])
        # 0.25 * 10 - 0.5 * 2 + 0.25 * 4 = 2.5
        self.assertAlmostEqual(c.expectation(lambda i: values[i]), 2.5)
        self.assertAlmostEqual(c.dot(values), 2.5)


if __name__ == '__main__':
    unittest.main()
