"""
Shared utilities for CLI parsing, logging and random sources.
"""

from typing import Callable, Optional, Tuple, Union
import argparse
import logging
import re
import time
from pathlib import Path

import numpy as np

RandomSource = Union[None, int, np.random.Generator]


def parse_float_range(spec: str, *, label: str) -> Tuple[float, float]:
    """Parse a float range specification such as '1-100' or '0.5:2'."""
    raw = (spec or "").strip()
    if not raw:
        raise ValueError(f"{label} cannot be empty")
    parts = [p.strip() for p in re.split(r"[,:-]", raw) if p.strip()]
    if not parts:
        raise ValueError(f"Invalid {label} value: {spec!r}")
    def _coerce(value: str) -> float:
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"{label} must contain floats: {spec!r}") from exc
    if len(parts) == 1:
        val = _coerce(parts[0])
        return (val, val)
    if len(parts) != 2:
        raise ValueError(f"Invalid {label} value: {spec!r}")
    lo, hi = _coerce(parts[0]), _coerce(parts[1])
    if lo > hi:
        lo, hi = hi, lo
    return (lo, hi)


def float_range_type(label: str) -> Callable[[str], Tuple[float, float]]:
    def _parser(text: str) -> Tuple[float, float]:
        try:
            return parse_float_range(text, label=label)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc))
    return _parser


def ensure_rng(source: RandomSource = None) -> np.random.Generator:
    """Return `source` if it already is a Generator, else seed a new one from it."""
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


def setup_logging(log_type: str, problem_name: str, log_dir: Optional[str] = 'logs',
                  level: int = logging.INFO) -> logging.Logger:
    """Sets up a logger for a benchmark run. With log_dir=None only the console is used."""
    logger = logging.getLogger(f"{log_type}_{problem_name}_logger")
    logger.setLevel(level)

    # Prevent adding multiple handlers if the logger already exists
    if not logger.handlers:
        session_id = int(time.time())
        formatter = logging.Formatter(
            f'%(asctime)s - %(levelname)s - [Session: {session_id}]-[Problem: {problem_name}] - %(message)s'
        )
        handlers = [logging.StreamHandler()]
        if log_dir is not None:
            log_dir_path = Path(log_dir)
            log_dir_path.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_dir_path / f"{log_type}_logs.log", mode='a'))  # Append mode
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger
