"""
Tests for value iteration, policy evaluation and policy iteration.
"""

import unittest
import numpy as np

from tabular_rl.errors import ConvergenceError, PolicyFormatError
from tabular_rl.mdp import TabularPolicy
from tabular_rl.planning import (
    calc_eu, calc_meu, greedy_policy, value_iteration,
    policy_evaluation, policy_iteration, improve_policy
)
from tabular_rl.tests.fixtures import (
    build_mdp, two_state_mdp, chain_mdp, choice_mdp, CHOICE_MDP_UTILITIES
)


class TestExpectedUtility(unittest.TestCase):
    """Test cases for calc_eu and calc_meu."""

    def test_calc_eu(self):
        mdp = choice_mdp()
        utilities = np.array([0.0, 2.0, -1.0, 1.0, 0.0])
        # 0.8 * 2 + 0.2 * -1
        self.assertAlmostEqual(calc_eu(mdp, 0, utilities, 0), 1.4)
        self.assertAlmostEqual(calc_eu(mdp, 0, utilities, 1), 2.0)
        # 0.9 * 1 + 0.1 * -1
        self.assertAlmostEqual(calc_eu(mdp, 1, utilities, 0), 0.8)

    def test_calc_meu(self):
        mdp = choice_mdp()
        utilities = np.array([0.0, 2.0, -1.0, 1.0, 0.0])
        meu, action = calc_meu(mdp, 0, utilities)
        self.assertAlmostEqual(meu, 2.0)
        self.assertEqual(action, 1)

        meu, action = calc_meu(mdp, 1, utilities)
        self.assertAlmostEqual(meu, 0.8)
        self.assertEqual(action, 0)

    def test_calc_meu_tie_goes_to_first_action(self):
        mdp = choice_mdp()
        # Both actions of state 0 lead to utility 0 in expectation
        meu, action = calc_meu(mdp, 0, np.zeros(5))
        self.assertEqual(meu, 0.0)
        self.assertEqual(action, 0)

    def test_calc_meu_requires_actions(self):
        with self.assertRaises(AssertionError):
            calc_meu(choice_mdp(), 4, np.zeros(5))

    def test_greedy_policy(self):
        mdp = choice_mdp()
        policy = greedy_policy(mdp, np.array(CHOICE_MDP_UTILITIES))
        self.assertEqual(policy.actions.tolist(), [1, 0, 0, 0, 0])


class TestValueIteration(unittest.TestCase):
    """Test cases for value iteration."""

    def test_two_state_mdp(self):
        utilities = value_iteration(two_state_mdp(), gamma=0.9, epsilon=0.01)
        self.assertAlmostEqual(utilities[0], 9.0, delta=0.01)
        self.assertEqual(utilities[1], 10.0)

    def test_chain_mdp(self):
        utilities = value_iteration(chain_mdp(), gamma=0.9, epsilon=0.001)
        np.testing.assert_allclose(utilities, [6.2, 8.0, 10.0], atol=1e-3)

    def test_choice_mdp(self):
        mdp = choice_mdp()
        epsilon = 0.001
        utilities = value_iteration(mdp, gamma=0.9, epsilon=epsilon)
        np.testing.assert_allclose(utilities, CHOICE_MDP_UTILITIES, atol=epsilon)
        self.assertEqual(greedy_policy(mdp, utilities).actions.tolist(), [1, 0, 0, 0, 0])

    def test_dead_state_keeps_its_reward(self):
        mdp = choice_mdp()
        mdp.rewards[4] = 3.0
        utilities = value_iteration(mdp, gamma=0.9, epsilon=0.01)
        self.assertEqual(utilities[4], 3.0)

    def test_parameter_checks(self):
        with self.assertRaises(ValueError):
            value_iteration(two_state_mdp(), gamma=1.0, epsilon=0.01)
        with self.assertRaises(ValueError):
            value_iteration(two_state_mdp(), gamma=0.0, epsilon=0.01)
        with self.assertRaises(ValueError):
            value_iteration(two_state_mdp(), gamma=0.9, epsilon=0.0)

    def test_iteration_cap(self):
        with self.assertRaises(ConvergenceError) as ctx:
            value_iteration(chain_mdp(), gamma=0.9, epsilon=0.001, max_iterations=2)
        self.assertEqual(ctx.exception.algorithm, "value_iteration")
        self.assertEqual(ctx.exception.iterations, 2)


class TestPolicyEvaluation(unittest.TestCase):
    """Test cases for policy evaluation."""

    def test_evaluates_fixed_policy(self):
        mdp = choice_mdp()
        policy = TabularPolicy([0, 0, 0, 0, 0])
        utilities = policy_evaluation(policy, mdp, gamma=0.9, epsilon=1e-6)
        # U1 = 0.9 * 0.8 = 0.72, U0 = 0.9 * (0.8 * 0.72 - 0.2) = 0.3384
        np.testing.assert_allclose(utilities, [0.3384, 0.72, -1.0, 1.0, 0.0], atol=1e-5)

    def test_updates_given_table_in_place(self):
        mdp = chain_mdp()
        utilities = np.zeros(3)
        result = policy_evaluation(TabularPolicy([0, 0, 0]), mdp, 0.9, 1e-6, utilities)
        self.assertIs(result, utilities)
        self.assertAlmostEqual(utilities[0], 6.2, places=4)

    def test_idempotent_on_converged_table(self):
        mdp = choice_mdp()
        policy = TabularPolicy([1, 0, 0, 0, 0])
        epsilon = 0.01
        utilities = policy_evaluation(policy, mdp, 0.9, epsilon)
        again = policy_evaluation(policy, mdp, 0.9, epsilon, utilities.copy())
        self.assertLessEqual(np.max(np.abs(again - utilities)), epsilon)


class TestPolicyIteration(unittest.TestCase):
    """Test cases for policy iteration."""

    def _suboptimal_states(self, mdp, policy, optimal):
        count = 0
        for s in range(mdp.num_states):
            if mdp.is_terminal(s) or not mdp.has_actions(s):
                continue
            meu, _ = calc_meu(mdp, s, optimal)
            if calc_eu(mdp, s, optimal, policy[s]) < meu - 1e-9:
                count += 1
        return count

    def test_finds_optimal_policy(self):
        mdp = choice_mdp()
        for seed in range(5):
            result = policy_iteration(mdp, 0.9, 1e-6, rng=np.random.default_rng(seed))
            self.assertEqual(result.policy.actions.tolist(), [1, 0, 0, 0, 0])
            np.testing.assert_allclose(result.utilities, CHOICE_MDP_UTILITIES, atol=1e-4)

    def test_from_given_policy(self):
        mdp = choice_mdp()
        start = TabularPolicy([0, 1, 0, 0, 0])
        result = policy_iteration(mdp, 0.9, 1e-6, policy=start)
        self.assertEqual(result.policy.actions.tolist(), [1, 0, 0, 0, 0])
        self.assertEqual(result.history[0], start)
        # The starting policy is not modified
        self.assertEqual(start.actions.tolist(), [0, 1, 0, 0, 0])

    def test_monotonic_improvement(self):
        mdp = choice_mdp()
        optimal = value_iteration(mdp, 0.9, 1e-8)
        result = policy_iteration(mdp, 0.9, 1e-8, policy=TabularPolicy([0, 1, 0, 0, 0]))
        counts = [self._suboptimal_states(mdp, p, optimal) for p in result.history]
        counts.append(self._suboptimal_states(mdp, result.policy, optimal))
        self.assertEqual(counts[-1], 0)
        for before, after in zip(counts, counts[1:]):
            self.assertLessEqual(after, before)
        self.assertEqual(result.sweeps, len(result.history))

    def test_improve_policy(self):
        mdp = choice_mdp()
        policy = TabularPolicy([0, 0, 0, 0, 0])
        changed = improve_policy(mdp, np.array(CHOICE_MDP_UTILITIES), policy)
        self.assertEqual(changed, 1)
        self.assertEqual(policy[0], 1)

    def test_rejects_unavailable_initial_action(self):
        # Action 1 has no transitions in state 0, so it would score 0 and beat the legal action
        mdp = build_mdp(
            num_states=2, num_actions=2, start=0,
            rewards=[-1.0, -10.0],
            terminal=[False, True],
            actions=[[0], []],
            transitions=[(0, 0, 1, 1.0)]
        )
        with self.assertRaises(PolicyFormatError):
            policy_iteration(mdp, 0.9, 1e-6, policy=TabularPolicy([1, 0]))

        result = policy_iteration(mdp, 0.9, 1e-6, policy=TabularPolicy([0, 0]))
        self.assertEqual(result.policy[0], 0)

    def test_iteration_cap(self):
        with self.assertRaises(ConvergenceError):
            policy_iteration(choice_mdp(), 0.9, 1e-6, policy=TabularPolicy([0, 1, 0, 0, 0]),
                             max_iterations=1)


if __name__ == '__main__':
    unittest.main()
