"""
Environment simulator running episodes of an MDP against an agent.

The environment owns the true MDP. Agents are given only a structural copy
(no rewards, no transition probabilities) and learn from the state and reward
passed to them at every step.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from tabular_rl.agents.base import Agent
from tabular_rl.config import DEFAULT_SEED
from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.io import read_mdp
from tabular_rl.logging import get_logger, log_iteration, log_mdp_step, log_phase


@dataclass
class Trial:
    """Record of one simulated episode."""

    states: List[int] = field(default_factory=list)
    """States visited, in order, starting with the start state"""

    actions: List[int] = field(default_factory=list)
    """Action returned by the agent in each visited state"""

    rewards: List[float] = field(default_factory=list)
    """Reward of each visited state"""

    terminated: bool = False
    """Whether the episode ended in a terminal state"""

    @property
    def length(self) -> int:
        return len(self.states)

    @property
    def total_reward(self) -> float:
        return float(sum(self.rewards))


class Environment:
    """
    Simulator for a finite MDP.

    A single numpy Generator drives every transition sample.
    """

    def __init__(
        self,
        mdp: FiniteMDP,
        rng: Optional[np.random.Generator] = None,
        seed: int = DEFAULT_SEED,
        max_steps: Optional[int] = None
    ):
        """
        Initialize the environment around a loaded MDP.

        Args:
            mdp: The true MDP
            rng: Random generator; a generator seeded with seed if None
            seed: Seed used when rng is None
            max_steps: Optional bound on the states visited per trial
        """
        self.mdp = mdp
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.max_steps = max_steps
        self._step_count = 0

    @classmethod
    def setup(cls, source: str, **kwargs) -> 'Environment':
        """
        Load the true MDP from a file and wrap it in an environment.

        Args:
            source: Path of the MDP file
            **kwargs: Passed on to the constructor

        Returns:
            Environment for the loaded MDP

        Raises:
            MDPLoadError: If the MDP cannot be loaded
        """
        return cls(read_mdp(source), **kwargs)

    @property
    def num_states(self) -> int:
        return self.mdp.num_states

    @property
    def num_actions(self) -> int:
        return self.mdp.num_actions

    def structural_copy(self) -> FiniteMDP:
        """
        Return an independent copy of the MDP without rewards or dynamics.
        """
        return self.mdp.structural_copy()

    def next_state(self, state: int, action: int) -> int:
        """
        Sample a successor state from P(. | state, action).

        Args:
            state: Current state
            action: Action taken

        Returns:
            Sampled next state
        """
        return self.mdp.transition(state, action).sample(self.rng)

    def run_trial(self, agent: Agent) -> Trial:
        """
        Simulate one episode from the start state.

        The agent is asked for an action in every visited state, including
        the final terminal state. The episode ends at a terminal state, at a
        non-terminal state without actions, or after max_steps states.

        Args:
            agent: Agent choosing the actions

        Returns:
            Record of the episode
        """
        trial = Trial()
        agent.reset_episode()
        state = self.mdp.start

        while True:
            reward = self.mdp.reward(state)
            action = agent.choose_action(state, reward)

            trial.states.append(state)
            trial.actions.append(action)
            trial.rewards.append(reward)

            if self.mdp.is_terminal(state):
                trial.terminated = True
                break

            if not self.mdp.has_actions(state):
                get_logger().warning({
                    "event": "trial_stuck",
                    "state": state,
                    "steps": trial.length
                })
                break

            if self.max_steps is not None and trial.length >= self.max_steps:
                get_logger().warning({
                    "event": "trial_step_limit",
                    "max_steps": self.max_steps
                })
                break

            next_state = self.next_state(state, action)
            log_mdp_step(state, action, next_state, reward, step_count=self._step_count)
            self._step_count += 1
            state = next_state

        return trial

    def run(self, agent: Agent, trials: int, progress: bool = False) -> List[Trial]:
        """
        Run independent trials, one after another.

        Args:
            agent: Agent choosing the actions; it may learn across trials
            trials: Number of trials
            progress: Whether to show a progress bar

        Returns:
            Record of every trial
        """
        log_phase("environment_run", {
            "trials": trials,
            "agent": type(agent).__name__
        })

        results = []
        for i in tqdm(range(trials), desc="Running trials", disable=not progress):
            trial = self.run_trial(agent)
            results.append(trial)
            log_iteration(i, trials, {
                "length": trial.length,
                "total_reward": trial.total_reward,
                "terminated": trial.terminated
            }, log_frequency=100)

        get_logger().info({
            "event": "environment_run_complete",
            "trials": trials,
            "terminated": sum(t.terminated for t in results),
            "mean_length": float(np.mean([t.length for t in results])) if results else 0.0
        })

        return results
