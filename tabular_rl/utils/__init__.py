"""
Utility functions for the tabular RL library.

This module provides functions for iteration, convergence detection and
accumulation, plus max/arg-max over restricted index sets.
"""

from tabular_rl.utils.iterate import iterate, converge, converged, accumulate
from tabular_rl.utils.extremum import max_value, arg_max_value

__all__ = [
    'iterate',
    'converge',
    'converged',
    'accumulate',
    'max_value',
    'arg_max_value'
]
