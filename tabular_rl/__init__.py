"""
Tabular Reinforcement Learning Library.

This library models finite Markov Decision Processes and provides value
iteration, policy iteration, Q-learning and passive TD learning over them,
with learning agents driven by an environment simulator.
"""

__version__ = '0.1.0'

# Import submodules to make them available through the package
from tabular_rl import distribution
from tabular_rl import utils
from tabular_rl import mdp
from tabular_rl import planning
from tabular_rl import agents
from tabular_rl import environment

__all__ = [
    'distribution',
    'utils',
    'mdp',
    'planning',
    'agents',
    'environment'
]
