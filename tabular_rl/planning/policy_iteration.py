"""
Policy iteration for finite MDPs with a known model.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.policy import TabularPolicy, random_policy, check_policy
from tabular_rl.planning.utilities import calc_eu, calc_meu
from tabular_rl.planning.policy_evaluation import policy_evaluation
from tabular_rl.errors import ConvergenceError
from tabular_rl.logging import get_logger, log_phase, log_table_summary


@dataclass
class PolicyIterationResult:
    """Outcome of policy iteration."""

    policy: TabularPolicy
    """Final policy, greedy with respect to its own utilities"""

    utilities: np.ndarray
    """Utilities of the final policy"""

    sweeps: int
    """Number of evaluate-and-improve sweeps performed"""

    history: List[TabularPolicy] = field(default_factory=list)
    """Policy at the start of every sweep"""


def improve_policy(mdp: FiniteMDP, utilities: np.ndarray, policy: TabularPolicy) -> int:
    """
    Switch every state whose policy action is not greedy to the greedy action.

    Args:
        mdp: The MDP
        utilities: Utilities of the current policy
        policy: Policy to improve in place

    Returns:
        Number of states whose action changed
    """
    changed = 0
    for state in range(mdp.num_states):
        if mdp.is_terminal(state) or not mdp.has_actions(state):
            continue
        meu, best_action = calc_meu(mdp, state, utilities)
        eu = calc_eu(mdp, state, utilities, policy[state])
        if meu > eu:
            policy[state] = best_action
            changed += 1
    return changed


def policy_iteration(
    mdp: FiniteMDP,
    gamma: float,
    epsilon: float,
    policy: Optional[TabularPolicy] = None,
    rng: Optional[np.random.Generator] = None,
    max_iterations: Optional[int] = None
) -> PolicyIterationResult:
    """
    Find an optimal policy by alternating policy evaluation and improvement.

    Args:
        mdp: The MDP
        gamma: Discount factor
        epsilon: Convergence threshold passed to policy evaluation
        policy: Initial policy; a random one drawn from rng if None
        rng: Random generator for the initial policy
        max_iterations: Optional cap on the number of evaluate-and-improve sweeps

    Returns:
        PolicyIterationResult with the final policy and its utilities

    Raises:
        ValueError: If gamma or epsilon is out of range
        PolicyFormatError: If the initial policy uses an unavailable action
        ConvergenceError: If max_iterations sweeps pass without a stable policy
    """
    if not 0.0 < gamma < 1.0:
        raise ValueError(f"gamma must lie in (0, 1), got {gamma}")
    if epsilon <= 0.0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    logger = get_logger()

    policy = random_policy(mdp, rng) if policy is None else check_policy(policy, mdp).copy()
    utilities = np.zeros(mdp.num_states)
    history = []

    log_phase("policy_iteration_start", {
        "num_states": mdp.num_states,
        "discount_factor": gamma,
        "epsilon": epsilon,
        "initial_policy": policy.actions
    })

    sweeps = 0
    changed = 1
    while changed:
        if max_iterations is not None and sweeps >= max_iterations:
            raise ConvergenceError("policy_iteration", sweeps, float(changed))

        history.append(policy.copy())
        policy_evaluation(policy, mdp, gamma, epsilon, utilities)
        changed = improve_policy(mdp, utilities, policy)
        sweeps += 1

        logger.info({
            "event": "policy_improvement",
            "sweep": sweeps,
            "changed_states": changed
        })

    log_table_summary(utilities, "policy_utilities")

    return PolicyIterationResult(policy=policy, utilities=utilities, sweeps=sweeps, history=history)
