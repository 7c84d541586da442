"""
Reading MDP descriptions and policies.

An MDP file is a JSON document:

    {
      "num_states": 3,
      "num_actions": 2,
      "start": 0,
      "rewards": [0.0, -1.0, 10.0],
      "terminal": [false, false, true],
      "actions": [[0, 1], [0], []],
      "transitions": [[0, 0, 1, 0.8], [0, 0, 2, 0.2], ...]
    }

Each transition entry is [state, action, next_state, probability]. Entries
that are not listed are zero; repeated entries add up.
"""

import json
from typing import Any, Dict, TextIO

import numpy as np

from tabular_rl.errors import MDPFormatError, MDPLoadError, PolicyFormatError
from tabular_rl.logging import get_logger
from tabular_rl.mdp.model import FiniteMDP
from tabular_rl.mdp.policy import TabularPolicy, check_policy

_REQUIRED_KEYS = ("num_states", "num_actions", "start", "rewards", "terminal", "actions")


def mdp_from_dict(data: Dict[str, Any]) -> FiniteMDP:
    """
    Build and validate an MDP from a parsed JSON document.

    Args:
        data: Parsed MDP document

    Returns:
        Validated MDP

    Raises:
        MDPFormatError: If the document is incomplete or inconsistent
    """
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise MDPFormatError(f"missing MDP field(s): {', '.join(missing)}")

    try:
        num_states = int(data["num_states"])
        num_actions = int(data["num_actions"])
    except (TypeError, ValueError):
        raise MDPFormatError("num_states and num_actions must be integers")
    if num_states < 1 or num_actions < 1:
        raise MDPFormatError(
            f"MDP needs at least one state and one action, "
            f"got {num_states} states and {num_actions} actions")

    transition_prob = np.zeros((num_states, num_states, num_actions), dtype=float)
    for entry in data.get("transitions", []):
        try:
            s, a, t, p = entry
            s, a, t, p = int(s), int(a), int(t), float(p)
        except (TypeError, ValueError):
            raise MDPFormatError(f"bad transition entry {entry!r}")
        if not (0 <= s < num_states and 0 <= t < num_states and 0 <= a < num_actions):
            raise MDPFormatError(f"transition entry {entry!r} is out of range")
        transition_prob[t, s, a] += p

    try:
        mdp = FiniteMDP(
            num_states=num_states,
            num_actions=num_actions,
            start=int(data["start"]),
            rewards=data["rewards"],
            terminal=data["terminal"],
            actions=data["actions"],
            transition_prob=transition_prob
        )
    except (TypeError, ValueError) as e:
        raise MDPFormatError(str(e))

    return mdp.validate()


def read_mdp(path: str) -> FiniteMDP:
    """
    Read an MDP from a JSON file.

    Args:
        path: Location of the MDP file

    Returns:
        Validated MDP

    Raises:
        MDPLoadError: If the file cannot be read
        MDPFormatError: If the file does not describe a valid MDP
    """
    logger = get_logger()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise MDPLoadError(f"unable to read MDP file {path}: {e.strerror or e}")
    except json.JSONDecodeError as e:
        raise MDPFormatError(f"MDP file {path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise MDPFormatError(f"MDP file {path} must hold a JSON object")

    mdp = mdp_from_dict(data)

    logger.info({
        "event": "mdp_loaded",
        "path": path,
        "num_states": mdp.num_states,
        "num_actions": mdp.num_actions,
        "start": mdp.start
    })

    return mdp


def read_policy(stream: TextIO, mdp: FiniteMDP) -> TabularPolicy:
    """
    Parse one action index per state from a text stream.

    Indices are separated by whitespace. For states with available actions the
    index must be one of them; other states accept any non-negative integer.

    Args:
        stream: Text source of the policy
        mdp: MDP the policy is for

    Returns:
        Tabular policy

    Raises:
        PolicyFormatError: If the stream does not hold a legal policy
    """
    tokens = stream.read().split()
    if len(tokens) != mdp.num_states:
        raise PolicyFormatError(
            f"expected {mdp.num_states} policy actions, got {len(tokens)}")

    actions = []
    for s, token in enumerate(tokens):
        try:
            action = int(token)
        except ValueError:
            raise PolicyFormatError(f"illegal non-integer policy action {token!r} for state {s}")
        actions.append(action)

    return check_policy(TabularPolicy(actions), mdp)
