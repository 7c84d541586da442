"""
Logging module for the tabular RL library.

This module provides JSON-formatted logging functionality for the library.
"""

from tabular_rl.logging.logger import (
    setup_logger,
    get_logger,
    log_iteration,
    log_table_summary,
    log_phase,
    log_convergence,
    log_mdp_step
)

__all__ = [
    "setup_logger",
    "get_logger",
    "log_iteration",
    "log_table_summary",
    "log_phase",
    "log_convergence",
    "log_mdp_step"
]
