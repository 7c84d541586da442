"""
Small MDPs shared by the test modules.
"""

import numpy as np

from tabular_rl.mdp.model import FiniteMDP


def build_mdp(num_states, num_actions, start, rewards, terminal, actions, transitions):
    """Build an MDP from (state, action, next_state, probability) entries."""
    transition_prob = np.zeros((num_states, num_states, num_actions))
    for s, a, t, p in transitions:
        transition_prob[t, s, a] += p
    return FiniteMDP(num_states, num_actions, start, rewards, terminal, actions, transition_prob)


def two_state_mdp():
    """State 0 (reward 0) moves to terminal state 1 (reward 10) with its only action."""
    return build_mdp(
        num_states=2, num_actions=1, start=0,
        rewards=[0.0, 10.0],
        terminal=[False, True],
        actions=[[0], []],
        transitions=[(0, 0, 1, 1.0)]
    )


def chain_mdp():
    """0 -> 1 -> 2 deterministically, rewards -1, -1 and terminal +10."""
    return build_mdp(
        num_states=3, num_actions=1, start=0,
        rewards=[-1.0, -1.0, 10.0],
        terminal=[False, False, True],
        actions=[[0], [0], []],
        transitions=[(0, 0, 1, 1.0), (1, 0, 2, 1.0)]
    )


def choice_mdp():
    """
    Two decision states, two terminal states and an unreachable dead state.

    With gamma = 0.9 the optimal policy is [1, 0, -, -, -] and the optimal
    utilities are [0.648, 0.72, -1, 1, 0].
    """
    return build_mdp(
        num_states=5, num_actions=2, start=0,
        rewards=[0.0, 0.0, -1.0, 1.0, 0.0],
        terminal=[False, False, True, True, False],
        actions=[[0, 1], [0, 1], [], [], []],
        transitions=[
            (0, 0, 1, 0.8), (0, 0, 2, 0.2),
            (0, 1, 1, 1.0),
            (1, 0, 3, 0.9), (1, 0, 2, 0.1),
            (1, 1, 0, 1.0),
        ]
    )


CHOICE_MDP_JSON = {
    "num_states": 5,
    "num_actions": 2,
    "start": 0,
    "rewards": [0.0, 0.0, -1.0, 1.0, 0.0],
    "terminal": [False, False, True, True, False],
    "actions": [[0, 1], [0, 1], [], [], []],
    "transitions": [
        [0, 0, 1, 0.8], [0, 0, 2, 0.2],
        [0, 1, 1, 1.0],
        [1, 0, 3, 0.9], [1, 0, 2, 0.1],
        [1, 1, 0, 1.0]
    ]
}

CHOICE_MDP_UTILITIES = [0.648, 0.72, -1.0, 1.0, 0.0]
