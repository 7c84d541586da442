"""
Finite MDP with tabular rewards and transition probabilities.

States and actions are integer indices. The transition table is laid out as
transition_prob[next_state, state, action].
"""

from typing import Sequence, Tuple

import numpy as np

from tabular_rl.distribution.discrete import Categorical
from tabular_rl.errors import MDPFormatError
from tabular_rl.mdp.process import MarkovDecisionProcess

# Allowed deviation of a transition distribution's total from 1
PROBABILITY_TOLERANCE = 1e-6


def state_action_table(num_states: int, num_actions: int) -> np.ndarray:
    """
    Allocate a zero-initialized state-action table.

    Args:
        num_states: Number of rows
        num_actions: Number of columns

    Returns:
        New float table of shape (num_states, num_actions)
    """
    return np.zeros((num_states, num_actions), dtype=float)


class FiniteMDP(MarkovDecisionProcess[int, int]):
    """
    A Markov Decision Process with finitely many indexed states and actions.

    Attributes:
        num_states: Number of states
        num_actions: Number of actions
        start: Index of the initial state
        rewards: Reward of each state
        terminal: Terminal flag of each state
        transition_prob: P(s'|s,a) stored at [s', s, a]
    """

    def __init__(
        self,
        num_states: int,
        num_actions: int,
        start: int,
        rewards: Sequence[float],
        terminal: Sequence[bool],
        actions: Sequence[Sequence[int]],
        transition_prob: np.ndarray
    ):
        if num_states < 1 or num_actions < 1:
            raise MDPFormatError(
                f"MDP needs at least one state and one action, "
                f"got {num_states} states and {num_actions} actions")

        self.num_states = int(num_states)
        self.num_actions = int(num_actions)
        self.start = int(start)
        self.rewards = np.array(rewards, dtype=float)
        self.terminal = np.array(terminal, dtype=bool)
        self._actions = tuple(tuple(int(a) for a in acts) for acts in actions)
        self.transition_prob = np.array(transition_prob, dtype=float)

        expected = (self.num_states, self.num_states, self.num_actions)
        if self.transition_prob.shape != expected:
            raise MDPFormatError(
                f"transition table has shape {self.transition_prob.shape}, expected {expected}")
        if self.rewards.shape != (self.num_states,):
            raise MDPFormatError(f"expected {self.num_states} rewards, got {self.rewards.size}")
        if self.terminal.shape != (self.num_states,):
            raise MDPFormatError(f"expected {self.num_states} terminal flags, got {self.terminal.size}")
        if len(self._actions) != self.num_states:
            raise MDPFormatError(
                f"expected an action list for each of {self.num_states} states, got {len(self._actions)}")

    def actions(self, state: int) -> Tuple[int, ...]:
        return self._actions[state]

    def num_available_actions(self, state: int) -> int:
        return len(self._actions[state])

    def transition(self, state: int, action: int) -> Categorical:
        return Categorical(self.transition_prob[:, state, action])

    def reward(self, state: int) -> float:
        return float(self.rewards[state])

    def is_terminal(self, state: int) -> bool:
        return bool(self.terminal[state])

    def validate(self) -> 'FiniteMDP':
        """
        Check the structural and probabilistic invariants of the model.

        Returns:
            self, to allow chaining

        Raises:
            MDPFormatError: If any invariant is violated
        """
        if not 0 <= self.start < self.num_states:
            raise MDPFormatError(f"start state {self.start} is outside [0, {self.num_states})")

        if not np.all(np.isfinite(self.rewards)):
            raise MDPFormatError("rewards must be finite")

        if not np.all(np.isfinite(self.transition_prob)):
            raise MDPFormatError("transition probabilities must be finite")

        if np.any(self.transition_prob < 0.0) or np.any(self.transition_prob > 1.0):
            raise MDPFormatError("transition probabilities must lie in [0, 1]")

        for s in range(self.num_states):
            for a in self._actions[s]:
                if not 0 <= a < self.num_actions:
                    raise MDPFormatError(
                        f"state {s} lists action {a} outside [0, {self.num_actions})")

            if self.terminal[s]:
                if np.any(self.transition_prob[:, s, :] != 0.0):
                    raise MDPFormatError(f"terminal state {s} has outgoing transitions")
                continue

            for a in self._actions[s]:
                total = self.transition_prob[:, s, a].sum()
                if not np.isclose(total, 1.0, rtol=0.0, atol=PROBABILITY_TOLERANCE):
                    raise MDPFormatError(
                        f"P(.|{s},{a}) sums to {total:g}, expected 1")

        return self

    def duplicate(self) -> 'FiniteMDP':
        """
        Return a deep copy sharing no tables with this model.
        """
        return FiniteMDP(
            num_states=self.num_states,
            num_actions=self.num_actions,
            start=self.start,
            rewards=self.rewards.copy(),
            terminal=self.terminal.copy(),
            actions=self._actions,
            transition_prob=self.transition_prob.copy()
        )

    def structural_copy(self) -> 'FiniteMDP':
        """
        Return a deep copy with rewards and transition probabilities zeroed.

        The copy keeps the cardinalities, start state, available actions and
        terminal flags, so agents can size their tables without seeing the
        true dynamics.
        """
        skeleton = self.duplicate()
        skeleton.rewards[:] = 0.0
        skeleton.transition_prob[:] = 0.0
        return skeleton

    def __repr__(self) -> str:
        return (f"FiniteMDP(num_states={self.num_states}, num_actions={self.num_actions}, "
                f"start={self.start}, terminal={np.flatnonzero(self.terminal).tolist()})")
