"""
Markov Decision Process (MDP) module for the tabular RL library.

This module provides the finite MDP model, deterministic policies over it and
readers for MDP and policy files.
"""

from tabular_rl.mdp.process import MarkovDecisionProcess
from tabular_rl.mdp.model import FiniteMDP, state_action_table
from tabular_rl.mdp.policy import Policy, TabularPolicy, random_policy, check_policy, NO_ACTION
from tabular_rl.mdp.io import read_mdp, read_policy, mdp_from_dict

__all__ = [
    'MarkovDecisionProcess',
    'FiniteMDP',
    'state_action_table',
    'Policy',
    'TabularPolicy',
    'random_policy',
    'check_policy',
    'NO_ACTION',
    'read_mdp',
    'read_policy',
    'mdp_from_dict'
]
