"""
Markov Decision Process interface.

This module provides the abstract interface shared by Markov Decision
Processes, which are mathematical frameworks for modeling decision-making in
situations where outcomes are partly random and partly under the control of a
decision maker.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Sequence

from tabular_rl.distribution.base import Distribution

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')

class MarkovDecisionProcess(ABC, Generic[S, A]):
    """
    Base class for Markov Decision Processes.

    A Markov Decision Process (MDP) is defined by:
    - A set of states S, some of which are terminal
    - A set of actions A, with a subset available in each state
    - A transition function P(s'|s,a) that gives the probability of transitioning
      to state s' when taking action a in state s
    - A reward function R(s) that gives the reward received in state s
    """

    @abstractmethod
    def actions(self, state: S) -> Sequence[A]:
        """
        Return the available actions in the given state, in a fixed order.

        Args:
            state: The current state

        Returns:
            Sequence of available actions (possibly empty)
        """
        pass

    @abstractmethod
    def transition(self, state: S, action: A) -> Distribution[S]:
        """
        Return the distribution over next states for an action in a state.

        Args:
            state: The current state
            action: The action to take

        Returns:
            Distribution over next states
        """
        pass

    @abstractmethod
    def reward(self, state: S) -> float:
        """
        Return the reward received in a state.

        Args:
            state: The state

        Returns:
            Reward
        """
        pass

    @abstractmethod
    def is_terminal(self, state: S) -> bool:
        """
        Check if a state is terminal.

        Args:
            state: The state to check

        Returns:
            True if the state is terminal, False otherwise
        """
        pass

    def has_actions(self, state: S) -> bool:
        """
        Check whether any action is available in a state.

        Args:
            state: The state to check

        Returns:
            True if at least one action is available
        """
        return len(self.actions(state)) > 0
