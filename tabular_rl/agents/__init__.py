"""
Agents module for the tabular RL library.

This module provides agents that act in the environment simulator: learning
agents that only see the MDP's structure, and an agent replaying a fixed
policy.
"""

from tabular_rl.agents.base import Agent, learning_rate
from tabular_rl.agents.qlearning import QLearningAgent
from tabular_rl.agents.passive_td import PassiveTDAgent
from tabular_rl.agents.policy_agent import GreedyPolicyAgent

__all__ = [
    'Agent',
    'learning_rate',
    'QLearningAgent',
    'PassiveTDAgent',
    'GreedyPolicyAgent'
]
