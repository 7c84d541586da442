"""
Base classes for probability distributions that can be sampled.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, TypeVar, Generic

import numpy as np

# Type variable for distribution outcomes
T = TypeVar('T')

class Distribution(ABC, Generic[T]):
    """
    Base class for probability distributions that can be sampled.

    Sampling draws from an explicit numpy Generator so that every random
    decision in a run comes from one seeded stream.
    """

    @abstractmethod
    def sample(self, rng: Optional[np.random.Generator] = None) -> T:
        """
        Return a random sample from this distribution.

        Args:
            rng: Random generator to draw from (a fresh unseeded one if None)

        Returns:
            A random outcome from the distribution
        """
        pass

    def sample_n(self, n: int, rng: Optional[np.random.Generator] = None) -> List[T]:
        """
        Return n samples from this distribution.

        Args:
            n: Number of samples to generate
            rng: Random generator to draw from

        Returns:
            List of n random samples
        """
        if rng is None:
            rng = np.random.default_rng()
        return [self.sample(rng) for _ in range(n)]

    @abstractmethod
    def expectation(self, f: Callable[[T], float]) -> float:
        """
        Return the expectation of f(X) where X is the random variable.

        Args:
            f: Function to apply to each outcome

        Returns:
            Expected value of f(X)
        """
        pass
