"""
Environment module for the tabular RL library.

This module provides the simulator that runs episodes of a hidden MDP
against an agent.
"""

from tabular_rl.environment.simulator import Environment, Trial

__all__ = [
    'Environment',
    'Trial'
]
