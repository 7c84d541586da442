"""
Tests for the environment simulator.
"""

import os
import json
import tempfile
import unittest
import numpy as np

from tabular_rl.agents import Agent, GreedyPolicyAgent
from tabular_rl.environment import Environment
from tabular_rl.errors import MDPLoadError
from tabular_rl.mdp import TabularPolicy
from tabular_rl.tests.fixtures import build_mdp, chain_mdp, choice_mdp, CHOICE_MDP_JSON


class RecordingAgent(Agent):
    """Always takes action 0 and remembers every (state, reward) it sees."""

    def __init__(self):
        self.seen = []
        self.resets = 0

    def choose_action(self, state, reward):
        self.seen.append((state, reward))
        return 0

    def reset_episode(self):
        self.resets += 1


def loop_mdp():
    """State 0 returns to itself forever."""
    return build_mdp(
        num_states=2, num_actions=1, start=0,
        rewards=[-1.0, 0.0],
        terminal=[False, True],
        actions=[[0], []],
        transitions=[(0, 0, 0, 1.0)]
    )


class TestEnvironment(unittest.TestCase):
    """Test cases for Environment."""

    def test_deterministic_transitions(self):
        for seed in range(10):
            env = Environment(chain_mdp(), seed=seed)
            agent = RecordingAgent()
            trial = env.run_trial(agent)
            self.assertEqual(trial.states, [0, 1, 2])
            self.assertEqual(agent.seen, [(0, -1.0), (1, -1.0), (2, 10.0)])
            self.assertTrue(trial.terminated)
            self.assertEqual(trial.total_reward, 8.0)

    def test_point_mass_ignores_draw(self):
        env = Environment(chain_mdp(), seed=0)
        for _ in range(100):
            self.assertEqual(env.next_state(0, 0), 1)

    def test_agent_is_called_at_terminal_state(self):
        env = Environment(chain_mdp(), seed=0)
        trial = env.run_trial(RecordingAgent())
        self.assertEqual(trial.length, 3)
        self.assertEqual(len(trial.actions), 3)

    def test_sampling_follows_transition_probabilities(self):
        env = Environment(choice_mdp(), seed=123)
        samples = [env.next_state(0, 0) for _ in range(5000)]
        self.assertEqual(set(samples), {1, 2})
        self.assertAlmostEqual(samples.count(2) / len(samples), 0.2, delta=0.02)

    def test_same_seed_same_trials(self):
        policy = TabularPolicy([0, 0, 0, 0, 0])
        first = Environment(choice_mdp(), seed=5).run(GreedyPolicyAgent(policy), 20)
        second = Environment(choice_mdp(), seed=5).run(GreedyPolicyAgent(policy), 20)
        self.assertEqual([t.states for t in first], [t.states for t in second])

    def test_run_counts_trials(self):
        env = Environment(chain_mdp(), seed=0)
        agent = RecordingAgent()
        trials = env.run(agent, 7)
        self.assertEqual(len(trials), 7)
        self.assertEqual(agent.resets, 7)
        self.assertEqual(len(agent.seen), 21)

    def test_zero_trials(self):
        env = Environment(chain_mdp(), seed=0)
        self.assertEqual(env.run(RecordingAgent(), 0), [])

    def test_step_limit(self):
        env = Environment(loop_mdp(), seed=0, max_steps=25)
        trial = env.run_trial(RecordingAgent())
        self.assertFalse(trial.terminated)
        self.assertEqual(trial.length, 25)

    def test_stops_at_dead_state(self):
        mdp = build_mdp(
            num_states=2, num_actions=1, start=0,
            rewards=[0.0, 3.0],
            terminal=[False, False],
            actions=[[0], []],
            transitions=[(0, 0, 1, 1.0)]
        )
        trial = Environment(mdp, seed=0).run_trial(RecordingAgent())
        self.assertEqual(trial.states, [0, 1])
        self.assertFalse(trial.terminated)

    def test_structural_copy(self):
        env = Environment(choice_mdp(), seed=0)
        copy = env.structural_copy()
        self.assertEqual(copy.num_states, env.num_states)
        self.assertEqual(copy.num_actions, env.num_actions)
        self.assertFalse(np.any(copy.rewards))
        self.assertFalse(np.any(copy.transition_prob))
        copy.rewards[3] = 42.0
        self.assertEqual(env.mdp.rewards[3], 1.0)
        self.assertIsNot(env.structural_copy(), copy)

    def test_setup(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "choice.json")
            with open(path, "w") as f:
                json.dump(CHOICE_MDP_JSON, f)
            env = Environment.setup(path, seed=1)
            self.assertEqual(env.num_states, 5)
            with self.assertRaises(MDPLoadError):
                Environment.setup(os.path.join(tmpdir, "missing.json"))


if __name__ == '__main__':
    unittest.main()
