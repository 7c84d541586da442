"""
Runtime settings for the tabular RL programs.

Settings are read from the process environment, after loading an optional
``.env`` file from the working directory.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_SEED = 42

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Configuration shared by the command-line programs."""

    # Seed of the single random stream used for sampling and random policies
    seed: int = DEFAULT_SEED

    # Logging
    debug: bool = False
    log_level: str = "info"
    log_file: Optional[str] = None

    # Show a tqdm progress bar while running trials
    progress: bool = False


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build a Settings object from environment variables.

    Recognised variables are TABULAR_RL_SEED, TABULAR_RL_DEBUG,
    TABULAR_RL_LOG_LEVEL, TABULAR_RL_LOG_FILE and TABULAR_RL_PROGRESS.

    Args:
        dotenv_path: Optional path of a .env file to load first

    Returns:
        Populated settings

    Raises:
        ValueError: If TABULAR_RL_SEED is not an integer
    """
    load_dotenv(dotenv_path)

    seed_text = os.getenv("TABULAR_RL_SEED")
    try:
        seed = int(seed_text) if seed_text else DEFAULT_SEED
    except ValueError:
        raise ValueError(f"TABULAR_RL_SEED must be an integer, got {seed_text!r}")

    return Settings(
        seed=seed,
        debug=_env_flag("TABULAR_RL_DEBUG", False),
        log_level=os.getenv("TABULAR_RL_LOG_LEVEL", "info"),
        log_file=os.getenv("TABULAR_RL_LOG_FILE") or None,
        progress=_env_flag("TABULAR_RL_PROGRESS", False),
    )
