"""
Iterative policy evaluation.
"""

from typing import Optional

import numpy as np

from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.policy import TabularPolicy
from tabular_rl.planning.utilities import calc_eu
from tabular_rl.planning.value_iteration import max_change
from tabular_rl.utils.iterate import iterate, converged
from tabular_rl.logging import log_convergence


def policy_update(
    policy: TabularPolicy,
    mdp: FiniteMDP,
    gamma: float,
    utilities: np.ndarray
) -> np.ndarray:
    """
    Apply one Bellman expectation sweep for a fixed policy.

    Args:
        policy: Action to follow in each state
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
            updated[state] = mdp.reward(state) + gamma * calc_eu(mdp, state, utilities, policy[state])
    return updated


def policy_evaluation(
    policy: TabularPolicy,
    mdp: FiniteMDP,
    gamma: float,
    epsilon: float,
    utilities: Optional[np.ndarray] = None,
    max_iterations: Optional[int] = None
) -> np.ndarray:
    """
    Compute the utilities of following a fixed policy.

    Sweeps continue while the largest change exceeds epsilon. Unlike value
    iteration the bound is not scaled by (1 - gamma) / gamma.

    Args:
        policy: Action to follow in each state
        mdp: The MDP
        gamma: Discount factor
        epsilon: Convergence threshold on the largest change per sweep
        utilities: Optional starting utilities, updated in place when given
        max_iterations: Optional cap on the number of sweeps

    Returns:
        Utility of every state under the policy

    Raises:
        ConvergenceError: If max_iterations sweeps pass without convergence
    """
    start = np.zeros(mdp.num_states) if utilities is None else np.array(utilities, dtype=float)

    sweep = 0

    def done(u: np.ndarray, v: np.ndarray) -> bool:
        nonlocal sweep
        sweep += 1
        delta = max_change(u, v)
        is_done = delta <= epsilon
        log_convergence(sweep, delta, epsilon, is_done)
        return is_done

    result = converged(
        iterate(lambda u: policy_update(policy, mdp, gamma, u), start),
        done,
        max_iterations=max_iterations,
        name="policy_evaluation",
        distance=max_change
    )

    if utilities is not None:
        utilities[:] = result
        return utilities
    return result
