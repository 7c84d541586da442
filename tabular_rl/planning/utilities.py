"""
Expected utility kernels shared by the planning algorithms.
"""

from typing import Tuple

import numpy as np

from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.policy import TabularPolicy, NO_ACTION


def calc_eu(mdp: FiniteMDP, state: int, utilities: np.ndarray, action: int) -> float:
    """
    Expected utility of taking an action in a state.

    Computes sum over s' of P(s'|state, action) * utilities[s'].

    Args:
        mdp: The MDP
        state: Current state
        utilities: Current utility estimate of every state
        action: Action taken in state

    Returns:
        Expected utility of the successor state
    """
    return mdp.transition(state, action).dot(utilities)


def calc_meu(mdp: FiniteMDP, state: int, utilities: np.ndarray) -> Tuple[float, int]:
    """
    Maximum expected utility over the actions available in a state.

    Ties are won by the action listed first in mdp.actions(state).

    Args:
        mdp: The MDP
        state: Current state, which must have at least one available action
        utilities: Current utility estimate of every state

    Returns:
        (maximum expected utility, maximizing action)
    """
    available = mdp.actions(state)
    assert len(available) > 0, f"state {state} has no available actions"

    best_action = available[0]
    meu = calc_eu(mdp, state, utilities, best_action)
    for action in available[1:]:
        eu = calc_eu(mdp, state, utilities, action)
        if eu > meu:
            meu = eu
            best_action = action
    return meu, best_action


def greedy_policy(mdp: FiniteMDP, utilities: np.ndarray) -> TabularPolicy:
    """
    Policy choosing the maximum expected utility action in every state.

    States without available actions are assigned NO_ACTION.

    Args:
        mdp: The MDP
        utilities: Utility of every state

    Returns:
        Greedy tabular policy
    """
    actions = []
    for s in range(mdp.num_states):
        if mdp.has_actions(s):
            actions.append(calc_meu(mdp, s, utilities)[1])
        else:
            actions.append(NO_ACTION)
    return TabularPolicy(actions)
