"""
Iteration utilities for RL algorithms.

This module provides utility functions for iterative algorithms,
including functions for convergence detection and accumulation.
"""

import itertools
from typing import TypeVar, Callable, Iterator, Optional, Iterable

from tabular_rl.errors import ConvergenceError

# Type variable for values
T = TypeVar('T')
U = TypeVar('U')

def iterate(step_func: Callable[[T], T], start_value: T) -> Iterator[T]:
    """
    Generate a sequence by repeatedly applying a function to its own result.

    This function creates an iterator that yields:
    start_value, step_func(start_value), step_func(step_func(start_value)), ...

    Args:
        step_func: Function to apply repeatedly
        start_value: Initial value

    Returns:
        Iterator yielding values in sequence
    """
    state = start_value
    while True:
        yield state
        state = step_func(state)


def converge(values_iterator: Iterator[T], done_func: Callable[[T, T], bool]) -> Iterator[T]:
    """
    Read from an iterator until two consecutive values satisfy the done function.

    Args:
        values_iterator: Iterator of values
        done_func: Function that takes two consecutive values and returns True if converged

    Returns:
        Iterator that stops when convergence is detected
    """
    try:
        a = next(values_iterator)
    except StopIteration:
        return

    yield a

    for b in values_iterator:
        yield b

        if done_func(a, b):
            return

        a = b


def converged(
    values_iterator: Iterator[T],
    done_func: Callable[[T, T], bool],
    *,
    max_iterations: Optional[int] = None,
    name: str = "iteration",
    distance: Optional[Callable[[T, T], float]] = None
) -> T:
    """
    Return the final value when an iterator converges according to the done function.

    Args:
        values_iterator: Iterator of values
        done_func: Function that takes two consecutive values and returns True if converged
        max_iterations: Optional cap on the number of steps taken after the start value
        name: Algorithm name used when reporting non-convergence
        distance: Optional measure of the last step, reported on non-convergence

    Returns:
        The final value after convergence

    Raises:
        ValueError: If the iterator is empty
        ConvergenceError: If max_iterations steps pass without convergence
    """
    if max_iterations is not None:
        values_iterator = itertools.islice(values_iterator, max_iterations + 1)

    steps = -1
    a = b = None
    is_done = False

    def check(x: T, y: T) -> bool:
        nonlocal is_done
        is_done = done_func(x, y)
        return is_done

    for x in converge(values_iterator, check):
        steps += 1
        a, b = b, x

    if steps < 0:
        raise ValueError("converged called on an empty iterator")

    if max_iterations is not None and not is_done and steps == max_iterations:
        delta = distance(a, b) if distance is not None and steps > 0 else float('nan')
        raise ConvergenceError(name, steps, delta)

    return b


def accumulate(
    iterable: Iterable[T],
    func: Callable[[U, T], U],
    *,
    initial: Optional[U] = None
) -> Iterator[U]:
    """
    Make an iterator that returns accumulated results of a binary function.

    Args:
        iterable: Input iterable
        func: Binary function to apply
        initial: Optional initial value

    Returns:
        Iterator of accumulated values
    """
    if initial is not None:
        iterable = itertools.chain([initial], iterable)

    return itertools.accumulate(iterable, func)
