"""
Agent interface used by the environment simulator.
"""

from abc import ABC, abstractmethod


def learning_rate(visits: float) -> float:
    """
    Step size after a given number of visits, alpha(n) = 60 / (59 + n).

    Args:
        visits: Number of visits to the updated entry, including this one

    Returns:
        Learning rate in (0, 1]
    """
    return 60.0 / (59.0 + visits)


class Agent(ABC):
    """
    An agent observes the current state and its reward and returns an action.

    The environment calls choose_action once per visited state, terminal
    states included, so that learning agents can update their estimates.
    The action returned for a terminal state is never executed.
    """

    @abstractmethod
    def choose_action(self, state: int, reward: float) -> int:
        """
        Update the agent and produce an action for the given state.

        Args:
            state: Current state
            reward: Reward of the current state

        Returns:
            Action to take in state
        """
        pass

    def reset_episode(self) -> None:
        """
        Forget any pending transition, as at the start of a new episode.
        """
        pass
