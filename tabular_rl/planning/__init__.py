"""
Planning module for the tabular RL library.

This module provides dynamic programming algorithms for MDPs whose rewards
and transition probabilities are fully known.
"""

from tabular_rl.planning.utilities import calc_eu, calc_meu, greedy_policy
from tabular_rl.planning.value_iteration import value_iteration
from tabular_rl.planning.policy_evaluation import policy_evaluation
from tabular_rl.planning.policy_iteration import (
    policy_iteration,
    improve_policy,
    PolicyIterationResult
)

__all__ = [
    'calc_eu',
    'calc_meu',
    'greedy_policy',
    'value_iteration',
    'policy_evaluation',
    'policy_iteration',
    'improve_policy',
    'PolicyIterationResult'
]
