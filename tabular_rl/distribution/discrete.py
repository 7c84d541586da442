"""
Discrete probability distributions.
"""

from typing import Callable, Iterable, Optional, TypeVar

import numpy as np

from tabular_rl.distribution.base import Distribution
from tabular_rl.utils.iterate import accumulate

# Type variable for distribution outcomes
T = TypeVar('T')

class Choose(Distribution[T]):
    """
    Uniform distribution over a finite set of options.

    Each option has equal probability of being selected.
    """

    def __init__(self, options: Iterable[T]):
        """
        Initialize a uniform choice distribution.

        Args:
            options: Collection of items to choose from with equal probability
        """
        self.options = list(options)

        if not self.options:
            raise ValueError("Options list cannot be empty")

    def sample(self, rng: Optional[np.random.Generator] = None) -> T:
        if rng is None:
            rng = np.random.default_rng()
        return self.options[int(rng.integers(len(self.options)))]

    def expectation(self, f: Callable[[T], float]) -> float:
        total = 0.0
        for option in self.options:
            total += f(option)
        return total / len(self.options)

    def __repr__(self) -> str:
        if len(self.options) <= 5:
            options_str = str(self.options)
        else:
            options_str = f"[{', '.join(str(o) for o in self.options[:3])}, ..., {self.options[-1]}]"
        return f"Choose({options_str})"


class Categorical(Distribution[int]):
    """
    Distribution over the outcomes 0..n-1 with explicit probabilities.

    Used for next-state distributions P(. | s, a): outcome i is a state index.
    """

    def __init__(self, probabilities: Iterable[float]):
        """
        Initialize a categorical distribution.

        Args:
            probabilities: Probability of each outcome, in outcome order
        """
        self.probabilities = np.asarray(list(probabilities), dtype=float)

        if self.probabilities.size == 0:
            raise ValueError("Probabilities cannot be empty")

    def select(self, u: float) -> int:
        """
        Map a uniform draw in [0, 1) to an outcome.

        Returns the first outcome whose cumulative probability exceeds u.
        If rounding keeps every cumulative sum at or below u, the last
        outcome is returned.

        Args:
            u: Uniform random number in [0, 1)

        Returns:
            Selected outcome index
        """
        for outcome, cumulative in enumerate(accumulate(self.probabilities, lambda a, b: a + b)):
            if cumulative > u:
                return outcome
        return len(self.probabilities) - 1

    def sample(self, rng: Optional[np.random.Generator] = None) -> int:
        if rng is None:
            rng = np.random.default_rng()
        return self.select(float(rng.random()))

    def expectation(self, f: Callable[[int], float]) -> float:
        total = 0.0
        for outcome, p in enumerate(self.probabilities):
            if p != 0.0:
                total += p * f(outcome)
        return total

    def dot(self, values: np.ndarray) -> float:
        """
        Expected value of a table indexed by outcome.

        Args:
            values: One value per outcome

        Returns:
            Sum over outcomes of P(i) * values[i]
        """
        return float(np.dot(self.probabilities, values))

    def __repr__(self) -> str:
        support = {i: float(p) for i, p in enumerate(self.probabilities) if p != 0.0}
        return f"Categorical({support})"
