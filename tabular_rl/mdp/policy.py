"""
Policy classes for finite Markov Decision Processes.

A policy defines the behavior of an agent by mapping each state to the
action it takes there.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

import numpy as np

from tabular_rl.distribution.discrete import Choose
from tabular_rl.errors import PolicyFormatError
from tabular_rl.mdp.model import FiniteMDP

# Action stored for states that have no available actions
NO_ACTION = 0


class Policy(ABC):
    """
    A policy maps states to actions.
    """

    @abstractmethod
    def act(self, state: int) -> int:
        """
        Return the action for the given state.

        Args:
            state: The current state

        Returns:
            Chosen action
        """
        pass

    def __call__(self, state: int) -> int:
        return self.act(state)


class TabularPolicy(Policy):
    """
    A deterministic policy stored as one action per state.
    """

    def __init__(self, actions: Iterable[int]):
        """
        Initialize the policy from an action table.

        Args:
            actions: Action for each state, in state order
        """
        self.actions = np.array(list(actions), dtype=int)

    def act(self, state: int) -> int:
        return int(self.actions[state])

    def __getitem__(self, state: int) -> int:
        return int(self.actions[state])

    def __setitem__(self, state: int, action: int) -> None:
        self.actions[state] = action

    def __len__(self) -> int:
        return len(self.actions)

    def copy(self) -> 'TabularPolicy':
        return TabularPolicy(self.actions.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, TabularPolicy):
            return False
        return np.array_equal(self.actions, other.actions)

    def __repr__(self) -> str:
        return f"TabularPolicy({self.actions.tolist()})"


def random_policy(mdp: FiniteMDP, rng: Optional[np.random.Generator] = None) -> TabularPolicy:
    """
    Build a policy choosing a uniformly random available action in each state.

    States without available actions are assigned NO_ACTION.

    Args:
        mdp: The MDP whose action sets to draw from
        rng: Random generator

    Returns:
        Random tabular policy
    """
    if rng is None:
        rng = np.random.default_rng()

    actions = []
    for s in range(mdp.num_states):
        if mdp.has_actions(s):
            actions.append(Choose(mdp.actions(s)).sample(rng))
        else:
            actions.append(NO_ACTION)
    return TabularPolicy(actions)


def check_policy(policy: TabularPolicy, mdp: FiniteMDP) -> TabularPolicy:
    """
    Check that a policy covers every state and only uses available actions.

    States without available actions accept any non-negative action.

    Args:
        policy: Policy to check
        mdp: MDP the policy is for

    Returns:
        The policy, to allow chaining

    Raises:
        PolicyFormatError: If the policy is not legal for the MDP
    """
    if len(policy) != mdp.num_states:
        raise PolicyFormatError(
            f"expected {mdp.num_states} policy actions, got {len(policy)}")

    for s in range(mdp.num_states):
        action = policy[s]
        if action < 0:
            raise PolicyFormatError(f"negative policy action {action} for state {s}")
        if mdp.has_actions(s) and action not in mdp.actions(s):
            raise PolicyFormatError(
                f"action {action} is not available in state {s} (available: {list(mdp.actions(s))})")
    return policy
