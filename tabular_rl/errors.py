"""
Exception types for the tabular RL library.

Contract violations (for example an empty index set handed to the extremum
helpers) are reported with plain assertions; everything a caller can
reasonably hit with bad input is reported with one of these classes.
"""


class TabularRLError(Exception):
    """Base class for all library errors."""


class MDPLoadError(TabularRLError):
    """The MDP source could not be read."""


class MDPFormatError(MDPLoadError):
    """The MDP source was read but does not describe a valid MDP."""


class PolicyFormatError(TabularRLError):
    """A policy source does not hold one legal action per state."""


class ConvergenceError(TabularRLError):
    """An iterative algorithm hit its iteration cap before converging."""

    def __init__(self, algorithm: str, iterations: int, delta: float):
        self.algorithm = algorithm
        self.iterations = iterations
        self.delta = delta
        super().__init__(
            f"{algorithm} did not converge after {iterations} iterations "
            f"(last delta={delta:g})"
        )
