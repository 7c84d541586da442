"""
Command-line programs for the tabular RL library.

    value-iteration gamma epsilon mdpfile
    policy-iteration gamma epsilon mdpfile
    qlearn gamma reward attempts mdpfile trials
    td gamma mdpfile trials < policyfile

Each program prints its results to stdout. Malformed arguments, unreadable
MDP files and invalid policies end the program with a non-zero status and a
one-line message on stderr.
"""

import sys
import argparse
from typing import List, Optional

import numpy as np

from tabular_rl.agents import QLearningAgent, PassiveTDAgent
from tabular_rl.config import Settings, load_settings
from tabular_rl.environment import Environment
from tabular_rl.errors import TabularRLError
from tabular_rl.logging import setup_logger, get_logger
from tabular_rl.mdp import FiniteMDP, read_mdp, read_policy
from tabular_rl.planning import value_iteration, policy_iteration

UNAVAILABLE = "X"


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"illegal non-integer value {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def _base_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed of the random stream (default: TABULAR_RL_SEED or 42)')
    parser.add_argument('--debug', action='store_true',
                        help='Write JSON debug logs to the logs directory')
    return parser


def _configure(args: argparse.Namespace) -> Settings:
    """Merge command-line options into the environment settings and set up logging."""
    settings = load_settings()
    if args.seed is not None:
        settings.seed = args.seed
    if args.debug:
        settings.debug = True
    setup_logger(debug=settings.debug, log_level=settings.log_level,
                 log_file=settings.log_file, reset=True)
    return settings


def _fail(prog: str, error: Exception) -> int:
    get_logger().error({
        "event": "program_failed",
        "program": prog,
        "error_type": type(error).__name__,
        "error": str(error)
    })
    print(f"{prog}: {error}", file=sys.stderr)
    return 1


def format_utilities(mdp: FiniteMDP, utilities: np.ndarray, fmt: str = "%1.3f") -> List[str]:
    """
    Render one utility per state, with X for non-terminal states without actions.
    """
    lines = []
    for s in range(mdp.num_states):
        if mdp.has_actions(s) or mdp.is_terminal(s):
            lines.append(fmt % utilities[s])
        else:
            lines.append(UNAVAILABLE)
    return lines


def value_iteration_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("value-iteration", "Compute optimal state utilities by value iteration.")
    parser.add_argument('gamma', type=float, help='Discount factor in (0, 1)')
    parser.add_argument('epsilon', type=float, help='Maximum allowable state utility error')
    parser.add_argument('mdpfile', help='MDP description file')
    args = parser.parse_args(argv)

    try:
        _configure(args)
        mdp = read_mdp(args.mdpfile)
        utilities = value_iteration(mdp, args.gamma, args.epsilon)
    except (TabularRLError, ValueError, OSError) as e:
        return _fail(parser.prog, e)

    print("\n".join(format_utilities(mdp, utilities)))
    return 0


def policy_iteration_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("policy-iteration", "Compute an optimal policy by policy iteration.")
    parser.add_argument('gamma', type=float, help='Discount factor in (0, 1)')
    parser.add_argument('epsilon', type=float, help='Policy evaluation convergence threshold')
    parser.add_argument('mdpfile', help='MDP description file')
    args = parser.parse_args(argv)

    try:
        settings = _configure(args)
        mdp = read_mdp(args.mdpfile)
        result = policy_iteration(mdp, args.gamma, args.epsilon,
                                  rng=np.random.default_rng(settings.seed))
    except (TabularRLError, ValueError, OSError) as e:
        return _fail(parser.prog, e)

    for s in range(mdp.num_states):
        print(result.policy[s] if mdp.has_actions(s) else 0)
    return 0


def qlearn_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser(
        "qlearn",
        "Run a Q-learning agent for a number of trials, using reward as an optimistic "
        "estimate while a state-action has been tried fewer than attempts times.")
    parser.add_argument('gamma', type=float, help='Discount factor')
    parser.add_argument('reward', type=float, help='Optimistic estimate of the best possible reward')
    parser.add_argument('attempts', type=float, help='Minimum tries of each state-action pair')
    parser.add_argument('mdpfile', help='MDP description file')
    parser.add_argument('trials', type=_non_negative_int, help='Number of trials to run')
    args = parser.parse_args(argv)

    try:
        settings = _configure(args)
        environment = Environment.setup(args.mdpfile, seed=settings.seed)
        mdp = environment.structural_copy()
        agent = QLearningAgent(mdp, args.gamma, args.reward, args.attempts)
        environment.run(agent, args.trials, progress=settings.progress)
    except (TabularRLError, ValueError, OSError) as e:
        return _fail(parser.prog, e)

    print("Q[s,a]")
    for s in range(mdp.num_states):
        print("\t".join("%1.3f" % q for q in agent.q_values[s]))

    print("\nU[s]")
    utilities = agent.utilities()
    for s in range(mdp.num_states):
        print(UNAVAILABLE if np.isnan(utilities[s]) else "%f" % utilities[s])

    print("\npolicy[s]")
    policy = agent.policy()
    for s in range(mdp.num_states):
        print(policy[s] if mdp.has_actions(s) else UNAVAILABLE)
    return 0


def td_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser(
        "td", "Run a passive TD agent following the policy read from standard input.")
    parser.add_argument('gamma', type=float, help='Discount factor')
    parser.add_argument('mdpfile', help='MDP description file')
    parser.add_argument('trials', type=_non_negative_int, help='Number of trials to run')
    args = parser.parse_args(argv)

    try:
        settings = _configure(args)
        environment = Environment.setup(args.mdpfile, seed=settings.seed)
        mdp = environment.structural_copy()
        policy = read_policy(sys.stdin, mdp)
        agent = PassiveTDAgent(mdp, policy, args.gamma)
        environment.run(agent, args.trials, progress=settings.progress)
    except (TabularRLError, ValueError, OSError) as e:
        return _fail(parser.prog, e)

    print("\n".join(format_utilities(mdp, agent.utilities)))
    return 0
