"""
Logging utilities for the model converter.

Provides structured logging with timestamps and per-stage timing.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

LOGGER_NAME = 'model_converter'


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure logging for the converter.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Only show WARNING and above

    Returns:
        Configured logger
    """
    # Determine log level
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '[%(asctime)s] [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


class Timer:
    """Context manager for timing operations with automatic logging."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None,
                 level: int = logging.DEBUG):
        """
        Initialize timer.

        Args:
            name: Name of the operation being timed
            logger: Logger to use (defaults to the package logger)
            level: Level for the start/finish messages
        """
        self.name = name
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.level = level
        self.start_time = None
        self.elapsed = None

    def __enter__(self):
        """Start timing."""
        self.start_time = time.perf_counter()
        self.logger.log(self.level, "[TIMER] %s started...", self.name)
        return self

    def __exit__(self, exc_type, exc, tb):
        """Stop timing and log result."""
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.log(self.level, "[OK] %s complete in %.3fs", self.name, self.elapsed)
        else:
            self.logger.log(self.level, "[FAIL] %s failed after %.3fs", self.name, self.elapsed)


@dataclass
class TimingStats:
    """Track timing statistics for conversion stages."""

    name: str
    elapsed: float
    substeps: List['TimingStats'] = field(default_factory=list)

    def add_substep(self, name: str, elapsed: float):
        """Add a substep timing."""
        self.substeps.append(TimingStats(name, elapsed))

    def get_percentage(self, total: float) -> float:
        """Get percentage of total time."""
        return (self.elapsed / total * 100) if total > 0 else 0

    def format_tree(self, total_time: float, indent: int = 0) -> str:
        """Format as a tree structure."""
        lines = []
        prefix = "  " * indent
        pct = self.get_percentage(total_time)

        # Format time with appropriate precision
        if self.elapsed < 1:
            time_str = f"{self.elapsed*1000:.0f}ms"
        else:
            time_str = f"{self.elapsed:.1f}s"

        dots = "." * max(1, 50 - len(prefix) - len(self.name))
        lines.append(f"{prefix}{self.name} {dots} {time_str:>8} ({pct:>5.1f}%)")

        for substep in self.substeps:
            lines.extend(substep.format_tree(total_time, indent + 1).split('\n'))

        return '\n'.join(lines)
