"""
Distribution module for the tabular RL library.

This module provides classes for representing probability distributions
that can be sampled and used to compute expectations.
"""

from tabular_rl.distribution.base import Distribution
from tabular_rl.distribution.discrete import Choose, Categorical

__all__ = [
    'Distribution',
    'Choose',
    'Categorical'
]
