"""
Value iteration for finite MDPs with a known model.
"""

from typing import Optional

import numpy as np

from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.planning.utilities import calc_meu
from tabular_rl.utils.iterate import iterate, converged
from tabular_rl.logging import get_logger, log_phase, log_convergence, log_table_summary


def max_change(u: np.ndarray, v: np.ndarray) -> float:
    """Largest absolute difference between two utility tables."""
    return float(np.max(np.abs(v - u)))


def bellman_update(mdp: FiniteMDP, gamma: float, utilities: np.ndarray) -> np.ndarray:
    """
    Apply one Bellman optimality sweep to every state.

    Terminal states take their reward. Non-terminal states without actions
    have no successor and also take their reward.

    Args:
        mdp: The MDP
        gamma: Discount factor
        utilities: Utilities from the previous sweep (not modified)

    Returns:
        New utility table
    """
    updated = np.empty_like(utilities)
    for state in range(mdp.num_states):
        if mdp.is_terminal(state) or not mdp.has_actions(state):
            updated[state] = mdp.reward(state)
        else:
            meu, _ = calc_meu(mdp, state, utilities)
            updated[state] = mdp.reward(state) + gamma * meu
    return updated


def value_iteration(
    mdp: FiniteMDP,
    gamma: float,
    epsilon: float,
    max_iterations: Optional[int] = None
) -> np.ndarray:
    """
    Compute optimal state utilities by value iteration.

    Sweeps stop once the largest change is at most epsilon * (1 - gamma) / gamma,
    which bounds the error of the returned utilities by epsilon.

    Args:
        mdp: The MDP
        gamma: Discount factor, 0 < gamma < 1
        epsilon: Maximum allowed utility error, > 0
        max_iterations: Optional cap on the number of sweeps

    Returns:
        Utility of every state

    Raises:
        ValueError: If gamma or epsilon is out of range
        ConvergenceError: If max_iterations sweeps pass without convergence
    """
    if not 0.0 < gamma < 1.0:
        raise ValueError(f"gamma must lie in (0, 1), got {gamma}")
    if epsilon <= 0.0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    tolerance = epsilon * (1.0 - gamma) / gamma

    log_phase("value_iteration_start", {
        "num_states": mdp.num_states,
        "discount_factor": gamma,
        "epsilon": epsilon,
        "tolerance": tolerance
    })

    sweep = 0

    def done(u: np.ndarray, v: np.ndarray) -> bool:
        nonlocal sweep
        sweep += 1
        delta = max_change(u, v)
        is_done = delta <= tolerance
        log_convergence(sweep, delta, tolerance, is_done)
        return is_done

    utilities = converged(
        iterate(lambda u: bellman_update(mdp, gamma, u), np.zeros(mdp.num_states)),
        done,
        max_iterations=max_iterations,
        name="value_iteration",
        distance=max_change
    )

    log_table_summary(utilities, "utilities")
    get_logger().info({
        "event": "value_iteration_complete",
        "sweeps": sweep
    })

    return utilities
