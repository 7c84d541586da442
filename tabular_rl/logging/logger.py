"""
Logger implementation for the tabular RL library.

Log records are rendered as JSON lines. With debugging enabled (or an explicit
log file) they go to a timestamped file in a 'logs' directory; otherwise only
warnings and errors are written to stderr.
"""

import os
import sys
import json
import logging
import datetime
from typing import Dict, Any, Optional
import numpy as np

# Create a custom JSON formatter that can handle numpy arrays and other complex types
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for logging."""

    def __init__(self):
        super().__init__()

    def _serialize(self, obj: Any) -> Any:
        """Serialize objects to JSON-compatible format."""
        if isinstance(obj, np.ndarray):
            # Only show a sample for large tables
            if obj.size > 100:
                shape_str = 'x'.join(str(dim) for dim in obj.shape)
                sample = obj.flatten()[:5].tolist()
                return f"ndarray({shape_str}): sample={sample}..."
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, (list, tuple)):
            if len(obj) > 100:
                return [self._serialize(item) for item in list(obj)[:5]] + ["..."]
            return [self._serialize(item) for item in obj]
        elif isinstance(obj, dict):
            return {k: self._serialize(v) for k, v in obj.items()}
        elif hasattr(obj, '__dict__'):
            return {
                "__type": obj.__class__.__name__,
                **{k: self._serialize(v) for k, v in obj.__dict__.items()
                   if not k.startswith('_')}
            }
        return obj

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if isinstance(record.msg, dict):
            log_data['data'] = self._serialize(record.msg)
        else:
            log_data['message'] = record.getMessage()
            if hasattr(record, 'data'):
                log_data['data'] = self._serialize(record.data)

        return json.dumps(log_data)


_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR
}

# Global logger instance
_logger = None

def setup_logger(
    debug: bool = False,
    log_level: str = "info",
    log_file: Optional[str] = None,
    reset: bool = False
) -> logging.Logger:
    """
    Set up the logger with the specified configuration.

    Without reset the first call wins and later calls return the already
    configured logger. With reset any existing handlers are closed and replaced.

    Args:
        debug: Whether to enable debugging
        log_level: The log level used when debugging (debug, info, warning, error)
        log_file: Optional custom log file path, relative paths land in 'logs'
        reset: Whether to replace an existing configuration

    Returns:
        Configured logger instance

    Raises:
        OSError: If the log file cannot be opened
    """
    global _logger

    if _logger is not None and not reset:
        return _logger

    logger = logging.getLogger("tabular_rl")
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    _logger = None

    if debug:
        logger.setLevel(_LEVELS.get(log_level.lower(), logging.INFO))
    else:
        logger.setLevel(logging.WARNING)

    if debug or log_file is not None:
        if log_file is None or not os.path.isabs(log_file):
            logs_dir = os.path.join(os.getcwd(), "logs")
            os.makedirs(logs_dir, exist_ok=True)

            if log_file is None:
                timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
                log_file = os.path.join(logs_dir, f"tabular_rl_{timestamp}.json")
            else:
                log_file = os.path.join(logs_dir, log_file)

        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    _logger = logger

    if debug:
        logger.info({
            "event": "logger_initialized",
            "log_level": log_level,
            "log_file": log_file
        })

    return logger


def get_logger() -> logging.Logger:
    """
    Get the configured logger instance.

    Returns:
        Logger instance
    """
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger


# Helper functions for common logging patterns

def log_iteration(
    iteration: int,
    total: int,
    metrics: Dict[str, Any],
    log_frequency: int = 10
) -> None:
    """
    Log iteration progress with metrics at specified frequency.

    Args:
        iteration: Current iteration number
        total: Total number of iterations
        metrics: Dictionary of metrics to log
        log_frequency: How often to log (e.g., every 10 iterations)
    """
    logger = get_logger()

    if (iteration % log_frequency == 0 or
        iteration == 0 or
        iteration == total - 1):

        logger.info({
            "event": "iteration_progress",
            "iteration": iteration,
            "total": total,
            "progress": f"{iteration}/{total} ({iteration/total:.1%})",
            "metrics": metrics
        })


def log_table_summary(table: np.ndarray, name: str = "table") -> None:
    """
    Log a summary of a utility or state-action table (mean, min, max, etc.).

    Args:
        table: Table to summarize
        name: Name to identify this table in the log
    """
    logger = get_logger()

    finite = table[np.isfinite(table)]
    if finite.size == 0:
        finite = np.zeros(1)

    logger.debug({
        "event": f"{name}_summary",
        "shape": table.shape,
        "mean": float(np.mean(finite)),
        "std": float(np.std(finite)),
        "min": float(np.min(finite)),
        "max": float(np.max(finite)),
        "sample": table.flatten()[:5].tolist()
    })


def log_phase(phase: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Log the start of a new processing phase.

    Args:
        phase: Name of the phase
        details: Optional details about the phase
    """
    logger = get_logger()

    log_data = {
        "event": "phase_start",
        "phase": phase
    }

    if details:
        log_data["details"] = details

    logger.info(log_data)


def log_convergence(
    iteration: int,
    error: float,
    tolerance: float,
    converged: bool
) -> None:
    """
    Log convergence information.

    Args:
        iteration: Current iteration
        error: Current error
        tolerance: Error tolerance for convergence
        converged: Whether convergence has been achieved
    """
    logger = get_logger()

    logger.debug({
        "event": "convergence_check",
        "iteration": iteration,
        "error": error,
        "tolerance": tolerance,
        "converged": converged
    })


def log_mdp_step(
    state: Any,
    action: Any,
    next_state: Any,
    reward: float,
    log_frequency: int = 100,
    step_count: int = 0
) -> None:
    """
    Log MDP state transitions at specified frequency.

    Args:
        state: Current state
        action: Action taken
        next_state: Resulting state
        reward: Reward received
        log_frequency: How often to log
        step_count: Current step count (for frequency calculation)
    """
    logger = get_logger()

    if step_count % log_frequency == 0:
        logger.debug({
            "event": "mdp_step",
            "step": step_count,
            "state": state,
            "action": action,
            "next_state": next_state,
            "reward": reward
        })
