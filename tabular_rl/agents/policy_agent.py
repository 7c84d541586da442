"""
Agent that replays a fixed policy, typically one computed by planning.
"""

from tabular_rl.agents.base import Agent
from tabular_rl.mdp.policy import Policy


class GreedyPolicyAgent(Agent):
    """
    Follows a given policy without learning.

    Counts the states it is asked about and sums their rewards, which lets a
    planned policy be scored inside the environment.
    """

    def __init__(self, policy: Policy):
        self.policy = policy
        self.total_reward = 0.0
        self.steps = 0

    def choose_action(self, state: int, reward: float) -> int:
        self.total_reward += reward
        self.steps += 1
        return self.policy(state)
