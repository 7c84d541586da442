"""
Active Q-learning agent with an optimistic exploration function.
"""

import numpy as np

from tabular_rl.agents.base import Agent, learning_rate
from tabular_rl.mdp.model import FiniteMDP, state_action_table
from tabular_rl.mdp.policy import TabularPolicy, NO_ACTION
from tabular_rl.utils.extremum import max_value, arg_max_value


class QLearningAgent(Agent):
    """
    Q-learning agent that only sees the environment's structure.

    The agent keeps visit counts N[s, a] and value estimates Q[s, a], and
    remembers the last non-terminal (state, action, reward) so the update for
    that transition can be applied when the next state is observed.
    """

    def __init__(
        self,
        mdp: FiniteMDP,
        gamma: float,
        optimistic_reward: float,
        min_attempts: float
    ):
        """
        Initialize the agent.

        Args:
            mdp: Structural copy of the environment's MDP (actions and terminal flags)
            gamma: Discount factor
            optimistic_reward: Value R+ assumed for under-explored state-actions
            min_attempts: Visits Ne below which a state-action counts as under-explored
        """
        self.mdp = mdp
        self.gamma = gamma
        self.optimistic_reward = optimistic_reward
        self.min_attempts = min_attempts

        self.visits = state_action_table(mdp.num_states, mdp.num_actions)
        self.q_values = state_action_table(mdp.num_states, mdp.num_actions)

        self.prev_state = 0
        self.prev_action = 0
        self.prev_reward = 0.0
        self.prev_valid = False

    def exploration(self, u: float, n: float) -> float:
        """
        Optimistic exploration function f(u, n).

        Args:
            u: Current value estimate
            n: Visit count

        Returns:
            R+ while n < Ne, otherwise u
        """
        if n < self.min_attempts:
            return self.optimistic_reward
        return u

    def _explore(self, state: int) -> int:
        # Each candidate is compared with the action selected so far, starting
        # from the last committed action when it is available here.
        available = self.mdp.actions(state)
        selected = self.prev_action if self.prev_action in available else available[0]
        for action in available:
            if (self.exploration(self.q_values[state, action], self.visits[state, action]) >
                    self.exploration(self.q_values[state, selected], self.visits[state, selected])):
                selected = action
        return selected

    def choose_action(self, state: int, reward: float) -> int:
        terminal = self.mdp.is_terminal(state)
        # A non-terminal state without actions ends the episode as well
        final = terminal or not self.mdp.has_actions(state)

        if terminal:
            self.q_values[state, :] = reward
            max_q = reward
        elif final:
            max_q = reward
        else:
            max_q = max_value(self.mdp.actions(state), self.q_values[state])

        if self.prev_valid:
            s, a = self.prev_state, self.prev_action
            self.visits[s, a] += 1
            self.q_values[s, a] += learning_rate(self.visits[s, a]) * (
                self.prev_reward + self.gamma * max_q - self.q_values[s, a])

        if final:
            self.prev_valid = False
        else:
            self.prev_state = state
            self.prev_action = self._explore(state)
            self.prev_reward = reward
            self.prev_valid = True

        return self.prev_action

    def reset_episode(self) -> None:
        self.prev_valid = False

    def utilities(self) -> np.ndarray:
        """
        Utility of each state implied by the Q-table.

        Returns:
            max_a Q[s, a] for states with actions, the stored terminal value
            for terminal states without actions, NaN otherwise
        """
        result = np.full(self.mdp.num_states, np.nan)
        for s in range(self.mdp.num_states):
            if self.mdp.has_actions(s):
                result[s] = max_value(self.mdp.actions(s), self.q_values[s])
            elif self.mdp.is_terminal(s):
                result[s] = self.q_values[s, 0]
        return result

    def policy(self) -> TabularPolicy:
        """
        Greedy policy with respect to the Q-table.

        Returns:
            Arg-max action for states with actions, NO_ACTION otherwise
        """
        actions = []
        for s in range(self.mdp.num_states):
            if self.mdp.has_actions(s):
                actions.append(arg_max_value(self.mdp.actions(s), self.q_values[s]))
            else:
                actions.append(NO_ACTION)
        return TabularPolicy(actions)
