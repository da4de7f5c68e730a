"""
Shared utilities for CLI parsing, logging setup and convergence plots.
"""

from typing import List, Optional, Sequence, Tuple
import logging
import re
import time
from pathlib import Path

import matplotlib.pyplot as plt

from .errors import MalformedInput


def parse_int(text: str, *, label: str) -> int:
    """Parse a single integer typed by the user."""
    raw = (text or "").strip()
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedInput(f"{label} must be an integer, got {text!r}") from exc


def parse_int_list(spec: str, *, label: str = "items") -> List[int]:
    """Parse integers separated by commas and/or whitespace. An empty spec yields []."""
    parts = [p for p in re.split(r"[,\s]+", (spec or "").strip()) if p]
    return [parse_int(p, label=label) for p in parts]


def parse_int_range(spec: str, *, label: str) -> Tuple[int, int]:
    """Parse an inclusive ``LO:HI`` (or ``LO,HI``) integer range; a single value means LO == HI."""
    raw = (spec or "").strip()
    if not raw:
        raise MalformedInput(f"{label} cannot be empty")
    parts = [p.strip() for p in re.split(r"[,:]", raw) if p.strip()]
    if len(parts) not in (1, 2):
        raise MalformedInput(f"Invalid {label} value: {spec!r}")
    values = [parse_int(p, label=label) for p in parts]
    lo, hi = values[0], values[-1]
    if lo > hi:
        lo, hi = hi, lo
    return (lo, hi)


def setup_logging(log_type: str, problem_name: str, log_dir: Optional[str] = None,
                  level: int = logging.INFO) -> logging.Logger:
    """Sets up a named logger for a solver run, optionally mirrored to ``<log_dir>/<log_type>_logs.log``."""
    logger = logging.getLogger(f"{log_type}_{problem_name}_logger")
    logger.setLevel(level)

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        session_id = int(time.time())
        formatter = logging.Formatter(
            f'%(asctime)s - %(levelname)s - [Session: {session_id}]-[Problem: {problem_name}] - %(message)s')

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_dir is not None:
            log_dir_path = Path(log_dir)
            log_dir_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir_path / f"{log_type}_logs.log", mode='a')
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def plot_fitness_history(history: Sequence[float], save_path: Path, *, title: str = "Best fitness per iteration",
                         ylabel: str = "Best fitness", target: Optional[float] = None) -> Path:
    """Save a line plot of the best-fitness trace; ``target`` draws the perfect score as a reference line."""
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    steps = list(range(1, len(history) + 1))
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(steps, list(history), linewidth=1.5)
    if target is not None:
        ax.axhline(target, color="red", linestyle="--", alpha=0.6, label="Perfect fitness")
        ax.legend()
    ax.set_title(title)
    ax.set_xlabel("Iteration")
    ax.set_ylabel(ylabel)
    ax.grid(True, linestyle="--", alpha=0.4)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return save_path
