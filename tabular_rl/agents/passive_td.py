"""
Passive temporal-difference learning of a fixed policy's utilities.
"""

import numpy as np

from tabular_rl.agents.base import Agent, learning_rate
from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.policy import TabularPolicy


class PassiveTDAgent(Agent):
    """
    TD(0) agent that follows a given policy and learns its utilities.

    Terminal states take their observed reward as utility. Every other
    observed transition moves U[prev] towards prev_reward + gamma * U[state].
    """

    def __init__(self, mdp: FiniteMDP, policy: TabularPolicy, gamma: float):
        """
        Initialize the agent.

        Args:
            mdp: Structural copy of the environment's MDP
            policy: Action to take in each state
            gamma: Discount factor
        """
        if len(policy) != mdp.num_states:
            raise ValueError(
                f"policy covers {len(policy)} states, MDP has {mdp.num_states}")

        self.mdp = mdp
        self.policy = policy
        self.gamma = gamma

        self.utilities = np.zeros(mdp.num_states)
        self.visits = np.zeros(mdp.num_states)

        self.prev_state = 0
        self.prev_reward = 0.0
        self.prev_valid = False

    def choose_action(self, state: int, reward: float) -> int:
        final = self.mdp.is_terminal(state) or not self.mdp.has_actions(state)

        if self.mdp.is_terminal(state):
            self.utilities[state] = reward

        if self.prev_valid:
            s = self.prev_state
            self.visits[s] += 1
            self.utilities[s] += learning_rate(self.visits[s]) * (
                self.prev_reward + self.gamma * self.utilities[state] - self.utilities[s])

        if final:
            self.prev_valid = False
        else:
            self.prev_state = state
            self.prev_reward = reward
            self.prev_valid = True

        return self.policy[state]

    def reset_episode(self) -> None:
        self.prev_valid = False
